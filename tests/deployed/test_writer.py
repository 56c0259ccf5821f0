"""Tests for resource listing output."""

import datetime as _datetime
import io as _io
import json as _json

import pytest as _pytest
import yaml as _yaml

import stratum.deployed as deployed

NOW = _datetime.datetime(2024, 5, 3, 12, 0, tzinfo=_datetime.timezone.utc)


@_pytest.fixture
def elements() -> list[deployed.ResourceElement]:
    return [
        deployed.ResourceElement(
            name="crew-svc",
            namespace="sea",
            api_version="v1",
            resource="services",
            creation_timestamp=NOW - _datetime.timedelta(days=2, hours=4),
        ),
        deployed.ResourceElement(
            name="crew",
            namespace="default",
            api_version="apps/v1",
            resource="deployments",
        ),
    ]


class TestHumanDuration:
    """kubectl style ages."""

    @_pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (_datetime.timedelta(seconds=-5), "<invalid>"),
            (_datetime.timedelta(seconds=-0.5), "0s"),
            (_datetime.timedelta(seconds=38), "38s"),
            (_datetime.timedelta(seconds=119), "119s"),
            (_datetime.timedelta(minutes=5, seconds=30), "5m30s"),
            (_datetime.timedelta(minutes=5), "5m"),
            (_datetime.timedelta(minutes=45), "45m"),
            (_datetime.timedelta(hours=3), "3h"),
            (_datetime.timedelta(hours=3, minutes=20), "3h20m"),
            (_datetime.timedelta(hours=20), "20h"),
            (_datetime.timedelta(days=2, hours=4), "2d4h"),
            (_datetime.timedelta(days=3), "3d"),
            (_datetime.timedelta(days=40), "40d"),
            (_datetime.timedelta(days=365 * 3), "3y"),
            (_datetime.timedelta(days=365 * 3 + 10), "3y10d"),
            (_datetime.timedelta(days=365 * 9), "9y"),
        ],
    )
    def test_human_duration(self, delta: _datetime.timedelta, expected: str) -> None:
        assert deployed.human_duration(delta) == expected


class TestResourceListWriter:
    """Tests for ResourceListWriter."""

    def test_table(self, elements: list[deployed.ResourceElement]) -> None:
        out = _io.StringIO()
        deployed.ResourceListWriter(elements, now=NOW).write(out, "table")

        rows = [line.split() for line in out.getvalue().splitlines() if line.strip()]
        assert rows == [
            ["NAMESPACE", "NAME", "API_VERSION", "AGE"],
            ["sea", "services/crew-svc", "v1", "2d4h"],
            ["default", "deployments/crew", "apps/v1", "<unknown>"],
        ]

    def test_table_without_headers(self, elements: list[deployed.ResourceElement]) -> None:
        out = _io.StringIO()
        deployed.ResourceListWriter(elements, no_headers=True, now=NOW).write(out, "table")
        assert "NAMESPACE" not in out.getvalue()
        assert "services/crew-svc" in out.getvalue()

    def test_json(self, elements: list[deployed.ResourceElement]) -> None:
        out = _io.StringIO()
        deployed.ResourceListWriter(elements).write(out, "json")

        data = _json.loads(out.getvalue())
        assert [item["name"] for item in data] == ["crew-svc", "crew"]
        assert data[1] == {
            "name": "crew",
            "namespace": "default",
            "apiVersion": "apps/v1",
            "resource": "deployments",
            "creationTimestamp": None,
        }

    def test_yaml(self, elements: list[deployed.ResourceElement]) -> None:
        out = _io.StringIO()
        deployed.ResourceListWriter(elements).write(out, "yaml")

        data = _yaml.safe_load(out.getvalue())
        assert [item["resource"] for item in data] == ["services", "deployments"]
        assert out.getvalue().startswith("- name: crew-svc\n")

    def test_empty_json(self) -> None:
        out = _io.StringIO()
        deployed.ResourceListWriter([]).write(out, "json")
        assert out.getvalue() == "[]\n"

    def test_unknown_format(self, elements: list[deployed.ResourceElement]) -> None:
        with _pytest.raises(ValueError, match="unknown output format"):
            deployed.ResourceListWriter(elements).write(_io.StringIO(), "xml")

    def test_formats(self) -> None:
        assert deployed.OUTPUT_FORMATS == ("table", "json", "yaml")
