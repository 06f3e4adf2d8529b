"""Evaluation filters: named dimension-weighting presets kept in the local store."""
import json
import logging
import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from streamlit_ui.utils.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

FILTERS_KEY = "filters"
SELECTED_FILTER_KEY = "selectedFilter"

DIMENSIONS = ("founders", "market", "product", "traction", "investors", "vision")


class FilterDimensions(BaseModel):
    """Importance of each dimension, 0 (ignore) to 100 (critical)."""
    founders: int = Field(75, ge=0, le=100)
    market: int = Field(60, ge=0, le=100)
    product: int = Field(35, ge=0, le=100)
    traction: int = Field(15, ge=0, le=100)
    investors: int = Field(5, ge=0, le=100)
    vision: int = Field(10, ge=0, le=100)


class EvaluationFilter(BaseModel):
    """Stored preset; serialised with the camelCase keys the store has always used."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    custom_prompt: str = Field(..., alias="customPrompt")
    dimensions: FilterDimensions = Field(default_factory=FilterDimensions)


class FilterForm(BaseModel):
    name: str = ""
    custom_prompt: str = ""

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Filter name is required")
        if len(v) > 50:
            raise ValueError("Name must be less than 50 characters")
        return v.strip()

    @field_validator("custom_prompt")
    @classmethod
    def check_custom_prompt(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Custom prompt is required")
        if len(v) > 500:
            raise ValueError("Custom prompt must be less than 500 characters")
        return v.strip()


class FilterFormError(ValueError):
    """Filter form failed validation; errors maps field name -> message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(errors.values()))
        self.errors = errors


class FilterRepository:
    """CRUD over filters plus the single selected-filter id."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_filters(self) -> list[EvaluationFilter]:
        raw = self.store.get(FILTERS_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Stored filters are not valid JSON; ignoring them")
            return []
        filters = []
        for item in items if isinstance(items, list) else []:
            try:
                filters.append(EvaluationFilter.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed filter {item!r}: {e}")
        return filters

    def get(self, filter_id: str) -> Optional[EvaluationFilter]:
        return next((f for f in self.list_filters() if f.id == filter_id), None)

    def _save_all(self, filters: list[EvaluationFilter]) -> None:
        payload = [f.model_dump(by_alias=True) for f in filters]
        self.store.set(FILTERS_KEY, json.dumps(payload))

    def create(
        self,
        name: str,
        custom_prompt: str,
        dimensions: Optional[dict[str, int]] = None,
    ) -> EvaluationFilter:
        """Validate and append a new filter. Raises FilterFormError."""
        errors: dict[str, str] = {}
        try:
            form = FilterForm(name=name or "", custom_prompt=custom_prompt or "")
        except ValidationError as e:
            for err in e.errors():
                ctx_error = (err.get("ctx") or {}).get("error")
                errors[str(err["loc"][0])] = str(ctx_error) if ctx_error else err["msg"]
        try:
            dims = FilterDimensions(**{k: int(round(v)) for k, v in (dimensions or {}).items()})
        except (ValidationError, TypeError, ValueError):
            errors["dimensions"] = "Each dimension must be between 0 and 100"
        if errors:
            raise FilterFormError(errors)

        filters = self.list_filters()
        taken = {f.id for f in filters}
        stamp = int(time.time() * 1000)
        while str(stamp) in taken:
            stamp += 1
        new_filter = EvaluationFilter(
            id=str(stamp),
            name=form.name,
            custom_prompt=form.custom_prompt,
            dimensions=dims,
        )
        filters.append(new_filter)
        self._save_all(filters)
        logger.info(f"Created filter {new_filter.id} ({new_filter.name})")
        return new_filter

    def selected_id(self) -> Optional[str]:
        return self.store.get(SELECTED_FILTER_KEY) or None

    def selected(self) -> Optional[EvaluationFilter]:
        selected_id = self.selected_id()
        return self.get(selected_id) if selected_id else None

    def toggle(self, filter_id: str) -> Optional[EvaluationFilter]:
        """Select filter_id, or deselect it if it is already selected. Returns the new selection."""
        if self.selected_id() == filter_id:
            self.store.delete(SELECTED_FILTER_KEY)
            return None
        chosen = self.get(filter_id)
        if chosen is None:
            raise KeyError(filter_id)
        self.store.set(SELECTED_FILTER_KEY, filter_id)
        return chosen
