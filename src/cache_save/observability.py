"""Decision log schema enforcement."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jsonschema import Draft7Validator

from .refresh import RefreshDecision, RefreshOutcome

logger = logging.getLogger(__name__)

DECISION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": [
        "decided_at",
        "primary_key",
        "restored_key",
        "outcome",
        "exact_match",
        "refresh_cache",
        "credentials_present",
        "looked_up",
    ],
    "properties": {
        "decided_at": {"type": "string", "format": "date-time"},
        "primary_key": {"type": "string", "minLength": 1},
        "restored_key": {"type": ["string", "null"]},
        "outcome": {"type": "string", "enum": [o.value for o in RefreshOutcome]},
        "exact_match": {"type": "boolean"},
        "refresh_cache": {"type": "boolean"},
        "credentials_present": {"type": "boolean"},
        "looked_up": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(DECISION_SCHEMA)


def validate_decision(payload: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(payload), key=lambda e: e.path)
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"decision log validation failed: {messages}")


@dataclass
class DecisionLogRecord:
    primary_key: str
    restored_key: Optional[str]
    outcome: str
    exact_match: bool
    refresh_cache: bool
    credentials_present: bool
    looked_up: bool = False
    decided_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def from_decision(cls, decision: RefreshDecision, looked_up: bool = False) -> "DecisionLogRecord":
        return cls(
            primary_key=decision.primary_key,
            restored_key=decision.restored_key,
            outcome=decision.outcome.value,
            exact_match=decision.exact_match,
            refresh_cache=decision.refresh_cache,
            credentials_present=decision.credentials_present,
            looked_up=looked_up,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "decided_at": self.decided_at,
            "primary_key": self.primary_key,
            "restored_key": self.restored_key,
            "outcome": self.outcome,
            "exact_match": self.exact_match,
            "refresh_cache": self.refresh_cache,
            "credentials_present": self.credentials_present,
            "looked_up": self.looked_up,
        }
        validate_decision(payload)
        return payload


def log_decision(decision: RefreshDecision, looked_up: bool = False) -> Dict[str, Any]:
    payload = DecisionLogRecord.from_decision(decision, looked_up).to_dict()
    logger.debug("refresh decision %s", json.dumps(payload, sort_keys=True))
    return payload
