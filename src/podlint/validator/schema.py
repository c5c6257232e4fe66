"""Pod manifest schema: recursive-descent validation over a line-annotated tree.

Each schema level is a method that checks the node kind, dispatches the
fields it recognizes in source order, then reports missing required fields.
All findings go to an :class:`ErrorCollector`; nothing below the root aborts
the walk.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import StrEnum
from functools import partial

from podlint.models.errors import ValidationResult
from podlint.models.nodes import Node
from podlint.validator.collector import ErrorCollector
from podlint.validator.fields import field_map
from podlint.validator.formats import (
    API_VERSIONS,
    KINDS,
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

logger = logging.getLogger("podlint.validator")

Handler = Callable[[Node], None]

_PROBES = ("readinessProbe", "livenessProbe")


class CpuProfile(StrEnum):
    """How resource ``cpu`` values are checked.

    ``permissive`` only requires an integer; ``strict`` also rejects values <= 0.
    """

    PERMISSIVE = "permissive"
    STRICT = "strict"


class PodValidator:
    """One validation session for one file."""

    def __init__(self, file: str, *, cpu_profile: CpuProfile | str = CpuProfile.PERMISSIVE) -> None:
        self.file = file
        self.cpu_profile = CpuProfile(cpu_profile)
        self._errors = ErrorCollector(file)

    def validate(self, documents: list[Node]) -> ValidationResult:
        """Validate parsed documents; exactly one mapping document is accepted."""
        self._errors = ErrorCollector(self.file)
        if len(documents) != 1 or not documents[0].is_mapping:
            line = documents[0].line if len(documents) == 1 else 0
            self._errors.add("root must be mapping", line)
        else:
            self._validate_pod(documents[0])
        logger.debug("Validated %s: %d error(s)", self.file, len(self._errors))
        return ValidationResult(file=self.file, errors=self._errors.errors)

    # -- generic helpers -----------------------------------------------------

    def _walk(
        self,
        node: Node,
        handlers: Mapping[str, Handler],
        required: tuple[str, ...] = (),
        unknown: Callable[[Node, Node], None] | None = None,
    ) -> dict[str, Node]:
        """Dispatch the fields of a mapping in source order.

        A repeated key is dispatched once, for its last value.  Returns the
        field lookup so callers can run checks after the scan.
        """
        fields = field_map(node)
        for key, value in node.pairs():
            if fields[key.value] is not value:
                continue
            handler = handlers.get(key.value)
            if handler is not None:
                handler(value)
            elif unknown is not None:
                unknown(key, value)
        for name in required:
            if name not in fields:
                self._errors.add(f"{name} is required")
        return fields

    def _expect_mapping(self, name: str, node: Node) -> bool:
        if node.is_mapping:
            return True
        self._errors.add(f"{name} must be mapping", node.line)
        return False

    def _expect_sequence(self, name: str, node: Node) -> bool:
        if node.is_sequence:
            return True
        self._errors.add(f"{name} must be sequence", node.line)
        return False

    def _scalar(self, name: str, node: Node) -> str | None:
        if node.is_scalar:
            return node.value
        self._errors.add(f"{name} must be string", node.line)
        return None

    def _int(self, name: str, node: Node) -> int | None:
        value = parse_int(node.value) if node.is_scalar else None
        if value is None:
            self._errors.add(f"{name} must be int", node.line)
        return value

    def _check_enum(self, name: str, allowed: frozenset[str], node: Node) -> None:
        text = self._scalar(name, node)
        if text is not None and not is_one_of(text, allowed):
            self._errors.add(f"{name} has unsupported value '{text}'", node.line)

    def _check_port(self, name: str, node: Node) -> None:
        value = self._int(name, node)
        if value is not None and not is_port(value):
            self._errors.add(f"{name} value out of range", node.line)

    # -- document ------------------------------------------------------------

    def _validate_pod(self, node: Node) -> None:
        self._walk(
            node,
            {
                "apiVersion": partial(self._check_enum, "apiVersion", API_VERSIONS),
                "kind": partial(self._check_enum, "kind", KINDS),
                "metadata": self._validate_metadata,
                "spec": self._validate_spec,
            },
            required=("apiVersion", "kind", "metadata", "spec"),
        )

    # -- metadata ------------------------------------------------------------

    def _validate_metadata(self, node: Node) -> None:
        if not self._expect_mapping("metadata", node):
            return
        self._walk(
            node,
            {
                "name": self._check_metadata_name,
                "namespace": partial(self._scalar, "namespace"),
                "labels": self._validate_labels,
            },
            required=("name",),
        )

    def _check_metadata_name(self, node: Node) -> None:
        if self._scalar("name", node) == "":
            self._errors.add("name is required", node.line)

    def _validate_labels(self, node: Node) -> None:
        if not self._expect_mapping("labels", node):
            return
        for key, value in node.pairs():
            if not key.is_scalar:
                self._errors.add("label key/value must be string", key.line)
            elif not value.is_scalar:
                self._errors.add("label key/value must be string", value.line)

    # -- spec ----------------------------------------------------------------

    def _validate_spec(self, node: Node) -> None:
        if not self._expect_mapping("spec", node):
            return
        self._walk(
            node,
            {
                "os": partial(self._check_enum, "os", OPERATING_SYSTEMS),
                "containers": self._validate_containers,
            },
            required=("containers",),
        )

    def _validate_containers(self, node: Node) -> None:
        if not self._expect_sequence("containers", node):
            return
        names: set[str] = set()
        for item in node.children:
            if not item.is_mapping:
                self._errors.add("container must be mapping", item.line)
                continue
            self._validate_container(item, names)

    def _validate_container(self, node: Node, names: set[str]) -> None:
        # ports and probes are checked as encountered; name, image and
        # resources after the scan, always in that order.
        handlers: dict[str, Handler] = {"ports": self._validate_ports}
        for probe in _PROBES:
            handlers[probe] = partial(self._validate_probe, probe)
        fields = self._walk(node, handlers)

        self._check_container_name(fields.get("name"), names)
        self._check_image(fields.get("image"))
        resources = fields.get("resources")
        if resources is None:
            self._errors.add("resources is required")
        else:
            self._validate_resources(resources)

    def _check_container_name(self, node: Node | None, names: set[str]) -> None:
        if node is None:
            self._errors.add("name is required")
            return
        text = self._scalar("name", node)
        if text is None:
            return
        if not text:
            self._errors.add("name is required", node.line)
            return
        if not is_identifier(text):
            self._errors.add(f"container name has invalid format '{text}'", node.line)
        if text in names:
            self._errors.add(f"container name '{text}' is not unique", node.line)
        names.add(text)

    def _check_image(self, node: Node | None) -> None:
        if node is None:
            self._errors.add("image is required")
            return
        text = self._scalar("image", node)
        if text is not None and not is_image_reference(text):
            self._errors.add(f"image has invalid format '{text}'", node.line)

    # -- ports ---------------------------------------------------------------

    def _validate_ports(self, node: Node) -> None:
        if not self._expect_sequence("ports", node):
            return
        for item in node.children:
            if not item.is_mapping:
                self._errors.add("port must be mapping", item.line)
                continue
            self._walk(
                item,
                {
                    "containerPort": partial(self._check_port, "containerPort"),
                    "protocol": partial(self._check_enum, "protocol", PROTOCOLS),
                },
                required=("containerPort",),
            )

    # -- probes --------------------------------------------------------------

    def _validate_probe(self, name: str, node: Node) -> None:
        if not self._expect_mapping(name, node):
            return
        self._walk(node, {"httpGet": self._validate_http_get}, required=("httpGet",))

    def _validate_http_get(self, node: Node) -> None:
        if not self._expect_mapping("httpGet", node):
            return
        self._walk(
            node,
            {
                "path": self._check_path,
                "port": partial(self._check_port, "port"),
            },
            required=("path", "port"),
        )

    def _check_path(self, node: Node) -> None:
        text = self._scalar("path", node)
        if text is not None and not is_absolute_path(text):
            self._errors.add("path must be absolute path", node.line)

    # -- resources -----------------------------------------------------------

    def _validate_resources(self, node: Node) -> None:
        if not self._expect_mapping("resources", node):
            return
        self._walk(
            node,
            {
                "requests": partial(self._validate_resource_set, "requests"),
                "limits": partial(self._validate_resource_set, "limits"),
            },
        )

    def _validate_resource_set(self, prefix: str, node: Node) -> None:
        """Resource keys are a closed set, unlike every other mapping."""
        if not self._expect_mapping(prefix, node):
            return

        def _unsupported(key: Node, _value: Node) -> None:
            self._errors.add(f"{prefix} has unsupported resource type '{key.value}'", key.line)

        self._walk(
            node,
            {
                "cpu": self._check_cpu,
                "memory": partial(self._check_memory, prefix),
            },
            unknown=_unsupported,
        )

    def _check_cpu(self, node: Node) -> None:
        value = self._int("cpu", node)
        if value is not None and self.cpu_profile is CpuProfile.STRICT and value <= 0:
            self._errors.add("cpu value out of range", node.line)

    def _check_memory(self, prefix: str, node: Node) -> None:
        text = self._scalar("memory", node)
        if text is not None and not is_memory_quantity(text):
            self._errors.add(f"{prefix}.memory has invalid format '{text}'", node.line)


def validate_documents(
    documents: list[Node],
    file: str,
    *,
    cpu_profile: CpuProfile | str = CpuProfile.PERMISSIVE,
) -> ValidationResult:
    """Validate parsed documents with a fresh session."""
    return PodValidator(file, cpu_profile=cpu_profile).validate(documents)
