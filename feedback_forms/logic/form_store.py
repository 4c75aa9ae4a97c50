"""Persistence for forms and responses.

Two collections live in the backend as JSON arrays: ``forms`` and
``responses``. Reads of a key that was never written return an empty list.
A payload that does not decode into the record shapes raises
``StoredDataCorruptError``; the store never silently discards data.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from feedback_forms.logic.errors import StoredDataCorruptError
from feedback_forms.logic.events import FORM_DELETED, FORM_SAVED, RESPONSE_SUBMITTED, publish
from feedback_forms.logic.storage_backend import KeyValueBackend
from feedback_forms.models.form import Form
from feedback_forms.models.form_response import FormResponse

logger = logging.getLogger(__name__)

FORMS_KEY = "forms"
RESPONSES_KEY = "responses"

_FORMS_ADAPTER = TypeAdapter(List[Form])
_RESPONSES_ADAPTER = TypeAdapter(List[FormResponse])


def _dump(records: Sequence[Form] | Sequence[FormResponse]) -> str:
    return json.dumps([r.to_record() for r in records], ensure_ascii=False)


class FormStore:
    """Read-modify-write of a collection runs under one lock per store."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._write_lock = threading.Lock()

    @property
    def backend_name(self) -> str:
        return getattr(self._backend, "name", type(self._backend).__name__)

    def _load(self, key: str, adapter: TypeAdapter) -> list:
        raw = self._backend.get(key)
        if raw is None or not raw.strip():
            return []
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as exc:
            logger.error("stored_collection_corrupt key=%s", key, exc_info=True)
            raise StoredDataCorruptError(key, f"{exc.error_count()} validation error(s)") from exc

    # Forms

    def list_forms(self) -> List[Form]:
        return self._load(FORMS_KEY, _FORMS_ADAPTER)

    def get_form(self, form_id: str) -> Optional[Form]:
        for form in self.list_forms():
            if form.id == form_id:
                return form
        return None

    def save_form(self, form: Form) -> None:
        """Replace the stored form with the same id, or append a new one."""
        with self._write_lock:
            forms = self.list_forms()
            for index, existing in enumerate(forms):
                if existing.id == form.id:
                    forms[index] = form
                    break
            else:
                forms.append(form)
            self._backend.set(FORMS_KEY, _dump(forms))
        publish(FORM_SAVED, {"form_id": form.id, "questions": len(form.questions)})

    def delete_form(self, form_id: str) -> None:
        """Remove a form and every response submitted to it.

        Missing ids are a no-op. Both collections go to the backend in one
        ``set_many`` call.
        """
        with self._write_lock:
            forms = [f for f in self.list_forms() if f.id != form_id]
            responses = self.list_responses()
            kept = [r for r in responses if r.form_id != form_id]
            self._backend.set_many({FORMS_KEY: _dump(forms), RESPONSES_KEY: _dump(kept)})
        publish(FORM_DELETED, {"form_id": form_id, "responses_removed": len(responses) - len(kept)})

    # Responses

    def list_responses(self) -> List[FormResponse]:
        return self._load(RESPONSES_KEY, _RESPONSES_ADAPTER)

    def list_responses_for_form(self, form_id: str) -> List[FormResponse]:
        return [r for r in self.list_responses() if r.form_id == form_id]

    def save_response(self, response: FormResponse) -> None:
        """Append a response. Never updates; a repeated id is stored twice."""
        with self._write_lock:
            responses = self.list_responses()
            responses.append(response)
            self._backend.set(RESPONSES_KEY, _dump(responses))
        publish(RESPONSE_SUBMITTED, {"form_id": response.form_id, "response_id": response.id})


__all__ = ["FormStore", "FORMS_KEY", "RESPONSES_KEY"]
