"""Stable cache keys for resolution requests."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from contract.models import ResolutionRequest


def compute_fingerprint(request: ResolutionRequest) -> str:
    """Hash the canonical JSON form of a request.

    Extension identity, installation root and the (already normalized)
    override map are serialized with sorted keys, so equivalent requests
    always share a fingerprint.
    """
    payload = orjson.dumps(request.model_dump(mode="json"), option=orjson.OPT_SORT_KEYS)
    return hashlib.sha256(payload).hexdigest()


__all__ = ["compute_fingerprint"]
