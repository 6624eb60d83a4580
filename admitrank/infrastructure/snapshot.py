# admitrank/infrastructure/snapshot.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from admitrank.config.config import settings
from admitrank.domain.models import Applicant, Policy, Program, RankedApplicant, Residence, Subject


class SnapshotError(ValueError):
    """Roster snapshot is unreadable or lacks a required key."""


@dataclass
class Snapshot:
    applicants: List[Applicant] = field(default_factory=list)
    programs: List[Program] = field(default_factory=list)
    subjects: List[Subject] = field(default_factory=list)
    policy: Policy = field(default_factory=Policy)


def _require(record: Dict[str, Any], key: str, where: str) -> Any:
    if key not in record or record[key] is None:
        raise SnapshotError(f"{where}: missing required key {key!r}")
    return record[key]


def _residence(raw: Any) -> Residence:
    if isinstance(raw, Residence):
        return raw
    if isinstance(raw, str) and raw.strip().upper() == Residence.IN_DISTRICT.value:
        return Residence.IN_DISTRICT
    return Residence.OUT_DISTRICT


def applicant_from_dict(raw: Dict[str, Any]) -> Applicant:
    """
    Maps one roster record (camelCase keys as produced by the import pipeline)
    to an Applicant. Optional fields get their documented defaults.
    """
    applicant_id = str(_require(raw, "id", "applicant"))
    prefs = raw.get("preferredPrograms", raw.get("preferredStreams")) or []
    if isinstance(prefs, str):
        prefs = [prefs]
    return Applicant(
        id=applicant_id,
        title=str(raw.get("title") or ""),
        first_name=str(raw.get("firstName") or ""),
        last_name=str(raw.get("lastName") or ""),
        preferred_programs=[str(p) for p in prefs if p is not None],
        scores=dict(raw.get("scores") or {}),
        residence=_residence(raw.get("residence")),
        is_quota_reserved=bool(raw.get("isQuotaReserved", raw.get("isQuota", False))),
    )


def program_from_dict(raw: Dict[str, Any]) -> Program:
    name = str(_require(raw, "name", "program"))
    try:
        quota = int(raw.get("quota") or 0)
    except (TypeError, ValueError):
        raise SnapshotError(f"program {name!r}: quota is not an integer: {raw.get('quota')!r}")
    return Program(id=str(raw.get("id") or name), name=name, quota=quota)


def subject_from_dict(raw: Dict[str, Any]) -> Subject:
    subject_id = str(_require(raw, "id", "subject"))
    return Subject(
        id=subject_id,
        name=str(raw.get("name") or subject_id),
        max_score=raw.get("maxScore", settings.max_score_per_subject),
    )


def policy_from_dict(raw: Optional[Dict[str, Any]]) -> Policy:
    if not raw:
        return settings.default_policy
    return Policy(
        enable_district_priority=bool(raw.get("enableDistrictPriority", False)),
        enable_quota_reservation=bool(raw.get("enableQuotaReservation", raw.get("enableQuota", False))),
    )


def load_snapshot(path: Path | str) -> Snapshot:
    """
    Reads a JSON roster snapshot:
        {"applicants": [...], "programs": [...], "subjects": [...], "criteria": {...}}
    "subjects" and "criteria" are optional.
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"snapshot not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise SnapshotError(f"{path}: top-level JSON object expected")

    return Snapshot(
        applicants=[applicant_from_dict(a) for a in _require(payload, "applicants", str(path))],
        programs=[program_from_dict(p) for p in _require(payload, "programs", str(path))],
        subjects=[subject_from_dict(s) for s in payload.get("subjects") or []],
        policy=policy_from_dict(payload.get("criteria")),
    )


def ranked_to_rows(ranked: List[RankedApplicant]) -> List[Dict[str, Any]]:
    """Flat dicts for printing or export, in rank order."""
    return [
        {
            "rank": r.rank,
            "id": r.id,
            "name": r.full_name,
            "total_score": r.total_score,
            "qualified_program": r.qualified_program,
            "residence": r.residence.value if isinstance(r.residence, Residence) else r.residence,
            "is_quota_reserved": r.is_quota_reserved,
        }
        for r in sorted(ranked, key=lambda x: x.rank)
    ]
