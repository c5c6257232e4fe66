"""YAML loader that turns ruamel.yaml's composed nodes into line-annotated trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode

from podlint.models.nodes import Node, NodeKind

logger = logging.getLogger("podlint.parser")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
_MAX_NODE_COUNT = 50_000
_MAX_DEPTH = 64

_NULL_TAG = "tag:yaml.org,2002:null"


class YAMLSafetyError(Exception):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors: these indicate oversized or hostile input
    (e.g. alias expansion bombs, excessive nesting, huge documents).
    """


class DocumentLoadError(Exception):
    """Raised when the input cannot be parsed into a document tree."""


def _tag_text(tag: Any) -> str:
    # Newer ruamel.yaml wraps tags in a Tag object.
    if tag is None or isinstance(tag, str):
        return tag or ""
    return str(getattr(tag, "value", None) or tag)


class TrackedLoader:
    """Parses YAML into :class:`Node` trees, one per document.

    Uses ruamel.yaml composition, which keeps a start mark on every node,
    so each resulting node carries its 1-based source line.
    """

    def __init__(self, max_depth: int = _MAX_DEPTH, max_nodes: int = _MAX_NODE_COUNT) -> None:
        self._yaml = YAML()
        self._max_depth = max_depth
        self._max_nodes = max_nodes

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_yaml_safety(content: str) -> None:
        """Pre-parse safety check on raw YAML text."""
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )

    # -- public loading API --------------------------------------------------

    def load(self, path: Path) -> list[Node]:
        """Load a YAML file and return one tree per document.

        ``OSError`` from reading the file propagates unchanged; content that
        is not UTF-8 is a parse failure.
        """
        with path.open("rb") as handle:
            raw = handle.read()
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentLoadError(f"{path}: {exc}") from exc
        return self.load_string(content, filename=str(path))

    def load_string(self, content: str, filename: str = "<string>") -> list[Node]:
        """Load YAML from a string."""
        self._check_yaml_safety(content)
        try:
            raw_documents = list(self._yaml.compose_all(content))
        except YAMLError as exc:
            logger.debug("YAML parse failure in %s: %s", filename, exc)
            raise DocumentLoadError(f"{filename}: {exc}") from exc
        except RecursionError as exc:
            raise YAMLSafetyError("YAML document is nested too deeply") from exc

        budget = [self._max_nodes]
        documents = [self._convert(raw, 1, budget) for raw in raw_documents if raw is not None]
        logger.debug(
            "Loaded %d document(s) from %s (%d nodes)",
            len(documents),
            filename,
            self._max_nodes - budget[0],
        )
        return documents

    # -- conversion ----------------------------------------------------------

    def _convert(self, raw: Any, depth: int, budget: list[int]) -> Node:
        """Recursively convert a ruamel.yaml node, enforcing depth and count limits.

        Aliased nodes are converted each time they are referenced, so the
        node budget also bounds alias expansion.
        """
        if depth > self._max_depth:
            raise YAMLSafetyError(f"YAML document exceeds maximum depth ({self._max_depth})")
        budget[0] -= 1
        if budget[0] < 0:
            raise YAMLSafetyError(f"YAML document exceeds maximum node count ({self._max_nodes:,})")

        line = raw.start_mark.line + 1
        if isinstance(raw, ScalarNode):
            text = "" if _tag_text(raw.tag) == _NULL_TAG else str(raw.value)
            return Node(kind=NodeKind.SCALAR, line=line, value=text)
        if isinstance(raw, MappingNode):
            children: list[Node] = []
            for raw_key, raw_value in raw.value:
                if not isinstance(raw_key, ScalarNode):
                    raise DocumentLoadError(
                        f"line {raw_key.start_mark.line + 1}: mapping keys must be scalars"
                    )
                children.append(self._convert(raw_key, depth + 1, budget))
                children.append(self._convert(raw_value, depth + 1, budget))
            return Node(kind=NodeKind.MAPPING, line=line, children=tuple(children))
        if isinstance(raw, SequenceNode):
            items = tuple(self._convert(item, depth + 1, budget) for item in raw.value)
            return Node(kind=NodeKind.SEQUENCE, line=line, children=items)
        raise DocumentLoadError(f"line {line}: unsupported YAML node {type(raw).__name__}")
