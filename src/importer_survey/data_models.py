"""
Data models for the importer survey.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field


class ImporterPackages:
    """
    Importer path -> tracked packages it depends on.

    Each importer keeps its packages in first-seen order without duplicates.
    """

    def __init__(self) -> None:
        self._packages: dict[str, list[str]] = {}

    def add(self, importer: str, package: str) -> bool:
        """
        Record that ``importer`` depends on ``package``.

        Returns:
            True if the pair was new, False if it was already recorded
        """
        packages = self._packages.setdefault(importer, [])
        if package in packages:
            return False
        packages.append(package)
        return True

    def to_dict(self) -> dict[str, list[str]]:
        return {importer: list(pkgs) for importer, pkgs in self._packages.items()}

    def __contains__(self, importer: object) -> bool:
        return importer in self._packages

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImporterPackages):
            return NotImplemented
        return self._packages == other._packages

    def __repr__(self) -> str:
        return f"ImporterPackages({self._packages!r})"


@dataclass
class ProjectRecord:
    """Usage of the tracked packages by one external repository."""

    name: str
    stars: int = 0
    packages: ImporterPackages = field(default_factory=ImporterPackages)

    def to_dict(self, include_name: bool = False) -> dict:
        data: dict = {}
        if include_name:
            data["name"] = self.name
        data["stars"] = self.stars
        data["packages"] = self.packages.to_dict()
        return data


class RankedProjects:
    """
    Project records kept in descending star order while they are inserted.

    Records with equal stars stay in insertion order.
    """

    def __init__(self) -> None:
        self._records: list[ProjectRecord] = []

    def insert(self, record: ProjectRecord) -> int:
        """
        Insert before the first record with strictly fewer stars.

        Returns:
            The index the record was inserted at
        """
        for index, existing in enumerate(self._records):
            if existing.stars < record.stars:
                self._records.insert(index, record)
                return index
        self._records.append(record)
        return len(self._records) - 1

    def __iter__(self) -> Iterator[ProjectRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> ProjectRecord:
        return self._records[index]

    def names(self) -> list[str]:
        return [record.name for record in self._records]
