"""Shaping of backend application payloads for the list and detail pages."""
import copy
from datetime import date, datetime
from typing import Any, Optional

SCORE_DIMENSIONS = ("founders", "market", "product", "traction", "vision", "investors")
ENRICHED_DIMENSIONS = ("market", "vision", "product", "founders", "traction", "investors")

STATUS_OPTIONS = ("all", "submitted", "completed", "incomplete")

# Skeleton shown (and editable) when extraction has not produced raw data yet
DEFAULT_RAW_DATA: dict[str, Any] = {
    "market": {
        "sam": "",
        "som": "",
        "tam": "",
        "target_geography": "",
        "problem_statement": "",
        "regulatory_domain": [],
        "competitive_landscape": "",
    },
    "vision": {
        "vision": "",
        "mission": "",
        "differentiation": "",
        "resilience_signal": "",
    },
    "product": {
        "tech_stack": [],
        "description": "",
        "is_scalable": False,
        "innovation_or_ip": "",
        "product_market_fit": "",
    },
    "founders": [],
    "traction": {
        "gmv": 0,
        "users": 0,
        "revenue": 0,
        "growth_rate": "",
        "revenue_model": "",
        "business_model": "",
        "current_customers": [],
        "retention_metrics": "",
    },
    "investors": {
        "advisors": [],
        "co_investors": [],
    },
    "contact_info": {
        "emails": [],
        "phone_numbers": [],
    },
    "company_website": "",
}


def _iso_date(value: Any) -> str:
    if value:
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            pass
    return date.today().isoformat()


def summarize_application(row: dict[str, Any]) -> dict[str, Any]:
    """List-row view of a backend application."""
    return {
        "id": row.get("id"),
        "company_name": row.get("startup_name") or "Unknown Company",
        "contact_name": row.get("contact_name"),
        "contact_email": row.get("contact_email"),
        "status": row.get("status") or "submitted",
        "overall_score": row.get("score") or None,
        "submitted_at": _iso_date(row.get("created_at")),
        "industry": row.get("industry") or "Unknown",
    }


def normalize_application(app: dict[str, Any]) -> dict[str, Any]:
    """Fill missing raw/enriched/results/issues so every tab has something to show."""
    data = dict(app)
    if not data.get("raw"):
        data["raw"] = copy.deepcopy(DEFAULT_RAW_DATA)
    if not data.get("enriched"):
        data["enriched"] = {}
    if not data.get("results"):
        data["results"] = {}
    if not data.get("issues"):
        data["issues"] = []
    return data


def status_label(status: Optional[str]) -> str:
    return status.capitalize() if status else "Unknown"


def score_label(score: Any) -> str:
    """Score when positive, otherwise 'Pending'."""
    if isinstance(score, (int, float)) and not isinstance(score, bool) and score > 0:
        return f"{score}"
    return "Pending"


def dimension_result(results: dict[str, Any], dimension: str) -> Optional[dict[str, Any]]:
    """Scored result for a dimension, or None when missing or not yet scored (-1)."""
    result = (results or {}).get(dimension)
    if not isinstance(result, dict) or result.get("score") == -1:
        return None
    return {
        "score": result.get("score"),
        "summary": result.get("bucket") or "No summary available",
        "confidence": result.get("confidenceScore") or 0,
        "issues": result.get("issues") or [],
        "manual_check": bool(result.get("manualCheck")),
    }


def score_color(score: float) -> str:
    """Streamlit markdown colour for a 0-10 score."""
    if score >= 8:
        return "green"
    if score >= 6:
        return "orange"
    return "red"
