"""FastAPI app: policy introspection and candidate checks."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from passpolicy.core.messages import describe_policy, field_errors, message_for
from passpolicy.core.models import PolicyConfig
from passpolicy.core.validator import PolicyValidator
from passpolicy.errors import InvalidConfig

logger = logging.getLogger(__name__)


class CheckRequest(BaseModel):
    password: str
    field: str = "password"


def create_app(
    policy: PolicyConfig, validator: PolicyValidator | None = None
) -> FastAPI:
    validator = validator or PolicyValidator()
    app = FastAPI(title="passpolicy")

    @app.exception_handler(InvalidConfig)
    async def invalid_config_handler(request, exc: InvalidConfig):
        logger.error("invalid policy configuration", extra={"error": str(exc)})
        return JSONResponse({"detail": str(exc)}, status_code=422)

    @app.get("/api/policy")
    async def get_policy():
        data = policy.model_dump()
        data["maximum_character_length"] = policy.maximum_character_length
        return data

    @app.get("/api/rules")
    async def get_rules():
        return describe_policy(policy)

    @app.post("/api/check")
    async def check_password(request: CheckRequest):
        result = validator.check(policy, request.password)
        logger.info(
            "checked candidate",
            extra={
                "passed": result.passed,
                "violations": [code.value for code in result.violations],
                "duration_ms": round(result.duration_ms, 3),
            },
        )
        return {
            "passed": result.passed,
            "violations": [code.value for code in result.violations],
            "errors": field_errors(request.field, result.violations),
            "messages": [message_for(code, policy) for code in result.violations],
        }

    return app
