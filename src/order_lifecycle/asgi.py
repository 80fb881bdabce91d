from __future__ import annotations

from order_lifecycle.adapters.inbound.web.fastapi_app import create_app
from order_lifecycle.bootstrap import build_usecases
from order_lifecycle.config import Settings

usecases = build_usecases(Settings.from_env())
app = create_app(usecases.create_order, usecases.advance_order, usecases.get_order)
