"""Tests for scalar format predicates."""

from __future__ import annotations

import pytest

from podlint.validator.formats import (
    OPERATING_SYSTEMS,
    PROTOCOLS,
    is_absolute_path,
    is_identifier,
    is_image_reference,
    is_memory_quantity,
    is_one_of,
    is_port,
    parse_int,
)


class TestIdentifier:
    @pytest.mark.parametrize("text", ["web", "web_app", "a_b_c"])
    def test_valid(self, text: str) -> None:
        assert is_identifier(text)

    @pytest.mark.parametrize(
        "text", ["", "Web", "web-app", "web1", "_web", "web_", "web__app", "web app"]
    )
    def test_invalid(self, text: str) -> None:
        assert not is_identifier(text)


class TestImageReference:
    @pytest.mark.parametrize(
        "text",
        [
            "registry.bigbrother.io/app:v1",
            "registry.bigbrother.io/my.app_1:1.0-rc",
            "registry.bigbrother.io/Web-2:latest",
        ],
    )
    def test_valid(self, text: str) -> None:
        assert is_image_reference(text)

    @pytest.mark.parametrize(
        "text",
        [
            "registry.bigbrother.io/app",
            "registry.bigbrother.io/app:",
            "registry.bigbrother.io/a:v1",
            "registry.bigbrother.io/-app:v1",
            "docker.io/app:v1",
            "registryXbigbrother.io/app:v1",
            "registry.bigbrother.io/app:v1\n",
        ],
    )
    def test_invalid(self, text: str) -> None:
        assert not is_image_reference(text)


class TestMemoryQuantity:
    @pytest.mark.parametrize("text", ["512Mi", "1Gi", "64Ki", "0Mi"])
    def test_valid(self, text: str) -> None:
        assert is_memory_quantity(text)

    @pytest.mark.parametrize("text", ["512M", "Mi", "1.5Gi", "512mi", "512Ti", "512", ""])
    def test_invalid(self, text: str) -> None:
        assert not is_memory_quantity(text)


class TestIntegers:
    @pytest.mark.parametrize(
        ("text", "expected"), [("8080", 8080), ("-1", -1), ("+5", 5), ("007", 7)]
    )
    def test_parse(self, text: str, expected: int) -> None:
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "1e3", " 1", "٣"])
    def test_parse_rejects(self, text: str) -> None:
        assert parse_int(text) is None

    def test_port_endpoints(self) -> None:
        assert is_port(1)
        assert is_port(65535)
        assert not is_port(0)
        assert not is_port(65536)


class TestMisc:
    def test_absolute_path(self) -> None:
        assert is_absolute_path("/")
        assert is_absolute_path("/healthz")
        assert not is_absolute_path("")
        assert not is_absolute_path("healthz")

    def test_enum_membership_is_exact(self) -> None:
        assert is_one_of("TCP", PROTOCOLS)
        assert not is_one_of("tcp", PROTOCOLS)
        assert is_one_of("windows", OPERATING_SYSTEMS)
        assert not is_one_of("Linux", OPERATING_SYSTEMS)
