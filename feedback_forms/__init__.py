"""Feedback forms service.

Authors build evaluation forms from a fixed set of question types, share a
link, collect responses and read per-question analytics with an optional
AI-written summary. The FastAPI app factory lives in `feedback_forms.main`;
business logic lives in `feedback_forms/logic/` and route handlers in
`feedback_forms/routes/`.
"""

from __future__ import annotations

from feedback_forms.main import create_app

__all__ = ["create_app"]
