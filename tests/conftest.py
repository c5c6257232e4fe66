"""Shared test fixtures for podlint."""

from __future__ import annotations

import pytest

from podlint.parser.loader import TrackedLoader
from podlint.validator.schema import validate_documents

VALID_POD_YAML = """\
apiVersion: v1
kind: Pod
metadata:
  name: web_app
  namespace: default
  labels:
    app: web
spec:
  os: linux
  containers:
    - name: web
      image: registry.bigbrother.io/web:1.2.3
      ports:
        - containerPort: 8080
          protocol: TCP
      readinessProbe:
        httpGet:
          path: /healthz
          port: 8080
      livenessProbe:
        httpGet:
          path: /livez
          port: 8080
      resources:
        requests:
          cpu: 1
          memory: 512Mi
        limits:
          cpu: 2
          memory: 1Gi
"""

# A document header whose containers list is appended by individual tests.
POD_HEADER_YAML = """\
apiVersion: v1
kind: Pod
metadata:
  name: web_app
spec:
  containers:
"""


def run_validation(content: str, file: str = "pod.yaml", **kwargs: object) -> list[str]:
    """Parse and validate YAML text, returning rendered diagnostics."""
    documents = TrackedLoader().load_string(content, filename=file)
    return validate_documents(documents, file, **kwargs).render()  # type: ignore[arg-type]


@pytest.fixture
def loader() -> TrackedLoader:
    return TrackedLoader()
