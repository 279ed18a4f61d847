#!/usr/bin/env python3
"""
Typesense Candidate Source - translate a MatchSpec into search queries.

Builds filter and sort strings from a MatchSpec and queries the organisation
and worker collections over Typesense's HTTP API. The engine consumes the
returned candidates; ranking quality beyond sort order is not this
module's concern.
"""

from typing import Any, Dict, List, Optional
import logging

import requests

from core.config_loader import SearchConfig
from core.matcher.interfaces import CandidateSource
from core.matcher.models import MatchSpec, OrganisationCandidate, WorkerCandidate

logger = logging.getLogger(__name__)

QUERY_BY = "name,service_area_tokens"

# Required capability -> boolean field on the worker document
WORKER_CAPABILITY_FILTERS = {
    "driving": "can_drive",
    "wheelchair_transfer": "has_wheelchair_transfer",
    "manual_handling": "has_manual_handling",
    "medication_administration": "has_medication_admin",
    "positive_behaviour_support": "has_positive_behaviour_support",
}


def _request_type_filter(spec: MatchSpec) -> Optional[str]:
    if spec.request_type == "care":
        return "provides_care:true"
    if spec.request_type == "transport":
        return "provides_transport:true"
    return None


def build_org_filters(spec: MatchSpec) -> str:
    parts = ["active:true"]

    type_filter = _request_type_filter(spec)
    if type_filter:
        parts.append(type_filter)

    requirements = spec.requirements
    if requirements is not None:
        if requirements.wheelchair_accessible:
            parts.append("wav_available:true")
        if requirements.verified_organisations_only:
            parts.append("verified:true")
        if "wheelchair_transfer" in requirements.required_capabilities:
            parts.append("has_transfer_assist:true")
        if "manual_handling" in requirements.required_capabilities:
            parts.append("has_manual_handling:true")

    return " && ".join(parts)


def build_worker_filters(spec: MatchSpec) -> str:
    parts = ["active:true", "clearance_current:true"]

    type_filter = _request_type_filter(spec)
    if type_filter:
        parts.append(type_filter)

    for cap in spec.required_capabilities:
        field_name = WORKER_CAPABILITY_FILTERS.get(cap)
        if field_name:
            parts.append(f"{field_name}:true")

    return " && ".join(parts)


def build_sort_by(spec: MatchSpec) -> str:
    if spec.location:
        return f"location({spec.location.lat}, {spec.location.lng}):asc, reliability_score:desc"
    return "reliability_score:desc, updated_at:desc"


def _geo_distance_km(hit: Dict[str, Any]) -> Optional[float]:
    raw = hit.get("geo_distance_meters")
    if isinstance(raw, dict):
        raw = raw.get("location")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw / 1000.0
    return None


def _location(doc: Dict[str, Any]):
    loc = doc.get("location")
    if isinstance(loc, (list, tuple)) and len(loc) == 2:
        return float(loc[0]), float(loc[1])
    return None


def organisation_from_hit(hit: Dict[str, Any]) -> OrganisationCandidate:
    doc = hit.get("document", {})
    text_score = hit.get("text_match")
    return OrganisationCandidate(
        entity_id=str(doc.get("entity_id") or doc.get("id")),
        name=doc.get("name", ""),
        org_type=doc.get("org_type", "care"),
        service_types=list(doc.get("service_types") or []),
        service_area_tokens=list(doc.get("service_area_tokens") or []),
        location=_location(doc),
        verified=bool(doc.get("verified", False)),
        active=bool(doc.get("active", True)),
        worker_count=int(doc.get("worker_count") or 0),
        reliability_score=float(doc.get("reliability_score") or 0.0),
        wav_available=bool(doc.get("wav_available", False)),
        has_transfer_assist=bool(doc.get("has_transfer_assist", False)),
        has_manual_handling=bool(doc.get("has_manual_handling", False)),
        total_vehicles=int(doc.get("total_vehicles") or 0),
        vehicle_types=list(doc.get("vehicle_types") or []),
        text_score=float(text_score) if isinstance(text_score, (int, float)) else 0.0,
        geo_distance_km=_geo_distance_km(hit),
    )


def worker_from_hit(hit: Dict[str, Any]) -> WorkerCandidate:
    doc = hit.get("document", {})
    return WorkerCandidate(
        entity_id=str(doc.get("entity_id") or doc.get("id")),
        name=doc.get("name", ""),
        organisation_id=str(doc.get("organisation_id", "")),
        organisation_name=doc.get("organisation_name", ""),
        worker_role=doc.get("worker_role", "support_worker"),
        capabilities=list(doc.get("capabilities") or []),
        service_area_tokens=list(doc.get("service_area_tokens") or []),
        location=_location(doc),
        can_drive=bool(doc.get("can_drive", False)),
        clearance_status=doc.get("clearance_status", "pending"),
        clearance_current=bool(doc.get("clearance_current", False)),
        organisation_verified=bool(doc.get("organisation_verified", False)),
        active=bool(doc.get("active", True)),
        reliability_score=float(doc.get("reliability_score") or 0.0),
        text_score=0.0,
        geo_distance_km=_geo_distance_km(hit),
    )


class TypesenseCandidateSource(CandidateSource):
    """
    CandidateSource backed by Typesense collections.

    The HTTP session is owned by the instance; build one per AppContext.
    """

    def __init__(self, config: SearchConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        if config.api_key:
            self.session.headers.update({"X-TYPESENSE-API-KEY": config.api_key})

    def _search(self, collection: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        url = f"{self.config.url.rstrip('/')}/collections/{collection}/documents/search"
        response = self.session.get(url, params=params, timeout=self.config.request_timeout_seconds)
        response.raise_for_status()
        hits = response.json().get("hits") or []
        logger.debug(f"Typesense {collection}: {len(hits)} hits")
        return hits

    def search_organisations(self, spec: MatchSpec) -> List[OrganisationCandidate]:
        params: Dict[str, Any] = {
            "q": "*",
            "query_by": QUERY_BY,
            "filter_by": build_org_filters(spec),
            "sort_by": build_sort_by(spec),
            "per_page": self.config.max_candidates,
        }
        if spec.location:
            params["geo_distance_field"] = "location"
            params["geo_distance_max"] = f"{spec.max_distance_km:g} km"

        hits = self._search(self.config.organisations_collection, params)
        return [organisation_from_hit(hit) for hit in hits]

    def search_workers(self, spec: MatchSpec) -> List[WorkerCandidate]:
        params = {
            "q": "*",
            "query_by": QUERY_BY,
            "filter_by": build_worker_filters(spec),
            "sort_by": build_sort_by(spec),
            "per_page": self.config.max_candidates,
        }
        hits = self._search(self.config.workers_collection, params)
        return [worker_from_hit(hit) for hit in hits]
