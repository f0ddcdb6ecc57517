"""
JSON Import Script for Tracking Plans

Usage:
    python scripts/import_tracking_plans.py <path-to-json>

JSON Format:
    A list of tracking plan bodies, each shaped like the POST /tracking-plans payload:
    [{"name": ..., "description": ..., "events": [{"name": ..., "type": ..., "properties": [...]}]}]
"""

import sys
import json
import asyncio
from pathlib import Path

# Add parent directory to path to import catalog modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError
from catalog.core.config import get_settings
from catalog.core.database import build_engine, build_session_factory, init_models
from catalog.core.errors import CatalogError
from catalog.core.logging import configure_logging
from catalog.core.unit_of_work import sqlalchemy_unit_of_work_factory
from catalog.schemas.tracking_plan import TrackingPlanCreate
from catalog.services.tracking_plans import TrackingPlanService


async def import_plans(file_path: str) -> dict[str, int]:
    """
    Compose every plan in the file, one transaction per plan.

    A plan that fails is reported and skipped; the others still import.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    with open(file_path, 'r', encoding='utf-8') as f:
        payloads = json.load(f)

    if not isinstance(payloads, list):
        print("Error: JSON file must contain a list of tracking plans")
        sys.exit(1)

    print(f"Starting import of {len(payloads)} plans from: {file_path}")

    settings = get_settings()
    configure_logging(settings)
    engine = build_engine(settings)
    if settings.db_create_all:
        await init_models(engine)

    service = TrackingPlanService(sqlalchemy_unit_of_work_factory(build_session_factory(engine)))

    created = 0
    failed = 0

    try:
        for i, payload in enumerate(payloads):
            try:
                spec = TrackingPlanCreate.model_validate(payload)
                plan = await service.create_plan(spec)
                created += 1
                print(f"[{i}] Created '{plan.name}' (id={plan.id}, events={len(plan.events)})")
            except ValidationError as e:
                failed += 1
                print(f"[{i}] Invalid payload: {e.error_count()} error(s)")
            except CatalogError as e:
                failed += 1
                print(f"[{i}] Failed: {e.message}")
    finally:
        await engine.dispose()

    print("\n" + "=" * 50)
    print("Import completed!")
    print(f"Total plans: {len(payloads)}")
    print(f"Created: {created}")
    print(f"Failed: {failed}")
    print("=" * 50)

    return {"created": created, "failed": failed}


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/import_tracking_plans.py <path-to-json>")
        sys.exit(1)

    result = asyncio.run(import_plans(sys.argv[1]))
    if result["failed"]:
        sys.exit(2)


if __name__ == "__main__":
    main()
