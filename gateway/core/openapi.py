"""OpenAPI customization for the admin credential header.

Adds an ``x-admin-key`` security scheme and attaches it only to operations
tagged "Admin" (except login), since public routes carry no credential.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

ADMIN_SCHEME = "AdminKeyAuth"


def apply_openapi_customizations(app: FastAPI) -> None:
    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {}).setdefault(
            ADMIN_SCHEME,
            {
                "type": "apiKey",
                "in": "header",
                "name": "x-admin-key",
                "description": "Admin secret, required by back-office endpoints.",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in (
            {"name": "Admin", "description": "Back-office login and credential checks."},
            {"name": "Maintenance", "description": "Maintenance notice."},
            {"name": "Health", "description": "Liveness checks."},
        ):
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if path.endswith("/login"):
                continue
            for method_obj in methods.values():
                if isinstance(method_obj, dict) and "Admin" in method_obj.get("tags", []):
                    method_obj["security"] = [{ADMIN_SCHEME: []}]

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
