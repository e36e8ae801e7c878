"""Tests for importer discovery."""

from unittest.mock import Mock

import pytest
import requests

from src.importer_survey.discovery import ImporterDiscovery
from src.importer_survey.exceptions import DiscoveryError
from src.shared_utilities.rate_limit_manager import RateLimitManager


def _response(paths=None, status=200, payload=None):
    response = Mock()
    response.headers = {}
    response.json.return_value = (
        payload if payload is not None else {"results": [{"path": p} for p in paths]}
    )
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestImporterDiscovery:
    """Test importer discovery against a stubbed HTTP session."""

    def setup_method(self):
        """Set up test fixtures."""
        self.graph = {}
        self.session = Mock()
        self.session.get.side_effect = self._get

    def _get(self, url, **kwargs):
        path = url.split("/importers/", 1)[1]
        return _response(self.graph.get(path, []))

    def _discovery(self, transitive=True):
        return ImporterDiscovery(
            base_url="https://importers.test/",
            transitive=transitive,
            session=self.session,
            rate_limit_manager=RateLimitManager(),
        )

    def test_deduplicates_and_sorts(self):
        self.graph["host/pkg"] = [
            "github.com/z/z",
            "github.com/a/a",
            "github.com/z/z",
        ]

        result = self._discovery(transitive=False).discover("host/pkg", frozenset())

        assert result == ["github.com/a/a", "github.com/z/z"]

    def test_request_url(self):
        self._discovery(transitive=False).discover("github.com/h/t/plugin", set())

        url = self.session.get.call_args.args[0]
        assert url == "https://importers.test/importers/github.com/h/t/plugin"

    def test_excluded_roots_dropped(self):
        self.graph["host/pkg"] = [
            "github.com/fork/a1/sub",
            "github.com/real/user",
        ]

        result = self._discovery(transitive=False).discover(
            "host/pkg", frozenset({"github.com/fork/a1"})
        )

        assert result == ["github.com/real/user"]

    def test_transitive_walks_importers_of_importers(self):
        self.graph["host/pkg"] = ["github.com/a/a"]
        self.graph["github.com/a/a"] = ["github.com/b/b", "host/pkg"]
        self.graph["github.com/b/b"] = ["github.com/a/a", "github.com/c/c"]

        result = self._discovery().discover("host/pkg", frozenset())

        assert result == ["github.com/a/a", "github.com/b/b", "github.com/c/c"]

    def test_excluded_importers_not_expanded(self):
        self.graph["host/pkg"] = ["github.com/fork/x"]
        self.graph["github.com/fork/x"] = ["github.com/d/d"]

        result = self._discovery().discover(
            "host/pkg", frozenset({"github.com/fork/x"})
        )

        assert result == []
        assert self.session.get.call_count == 1

    def test_direct_only_does_not_expand(self):
        self.graph["host/pkg"] = ["github.com/a/a"]
        self.graph["github.com/a/a"] = ["github.com/b/b"]

        result = self._discovery(transitive=False).discover("host/pkg", frozenset())

        assert result == ["github.com/a/a"]

    def test_empty_results(self):
        self.session.get.side_effect = None
        self.session.get.return_value = _response(payload={"results": None})

        assert self._discovery().discover("host/pkg", frozenset()) == []

    def test_http_error_raises(self):
        self.session.get.side_effect = None
        self.session.get.return_value = _response([], status=500)

        with pytest.raises(DiscoveryError, match="Error fetching importers of host/pkg"):
            self._discovery().discover("host/pkg", frozenset())

    def test_connection_error_raises(self):
        self.session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(DiscoveryError):
            self._discovery().discover("host/pkg", frozenset())

    def test_malformed_entry_raises(self):
        self.session.get.side_effect = None
        self.session.get.return_value = _response(payload={"results": [{"x": 1}]})

        with pytest.raises(DiscoveryError, match="Invalid importer entry"):
            self._discovery().discover("host/pkg", frozenset())

    @pytest.mark.parametrize(
        "results",
        [
            [{"path": None}],
            [{"path": 5}, {"path": "github.com/a/b"}],
            [{"path": ""}],
        ],
    )
    def test_non_string_path_raises(self, results):
        self.session.get.side_effect = None
        self.session.get.return_value = _response(payload={"results": results})

        with pytest.raises(DiscoveryError, match="Invalid importer entry"):
            self._discovery().discover("host/pkg", frozenset())

    def test_invalid_json_raises(self):
        response = _response([])
        response.json.side_effect = ValueError("Expecting value")
        self.session.get.side_effect = None
        self.session.get.return_value = response

        with pytest.raises(DiscoveryError, match="Invalid importers response"):
            self._discovery().discover("host/pkg", frozenset())
