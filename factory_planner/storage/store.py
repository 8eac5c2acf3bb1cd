"""Directory-backed project storage.

Each document lives in its own JSON file named after its storage key, so a
directory of saved work can be copied or checked in as is. Documents that
fail validation on load are reported and replaced by an empty default; they
are never partially applied.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..catalog.regions import RegionID
from .envelopes import (
    EnvelopeError,
    Project,
    ProjectListing,
    create_region_plan,
    deserialize_project,
    listing_from_dict,
    listing_to_dict,
    region_plan_from_dict,
    region_plan_to_dict,
    serialize_project,
    upsert_project_meta,
)

logger = logging.getLogger(__name__)

PROJECT_LISTING_KEY = "endfield-factory-planner-project-listing-v1"
PROJECT_KEY_PREFIX = "endfield-factory-planner-project-"
REGION_PLAN_KEY_PREFIX = "endfield-factory-planner-region-plan-"


def get_project_storage_key(guid: str) -> str:
    return f"{PROJECT_KEY_PREFIX}{guid}"


def get_region_plan_storage_key(region: RegionID) -> str:
    return f"{REGION_PLAN_KEY_PREFIX}{RegionID(region).value}"


class ProjectStore:
    """Saved projects, the project listing and region plans under one directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _file(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._file(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, text: str):
        self.directory.mkdir(parents=True, exist_ok=True)
        self._file(key).write_text(text, encoding="utf-8")

    def load_listing(self) -> ProjectListing:
        raw = self._read(PROJECT_LISTING_KEY)
        if raw is None:
            return ProjectListing()
        try:
            return listing_from_dict(json.loads(raw))
        except (json.JSONDecodeError, EnvelopeError) as exc:
            logger.warning("Project listing is unreadable, starting empty: %s", exc)
            return ProjectListing()

    def save_listing(self, listing: ProjectListing):
        self._write(PROJECT_LISTING_KEY, json.dumps(listing_to_dict(listing)))

    def load_project(self, guid: str) -> Optional[Project]:
        raw = self._read(get_project_storage_key(guid))
        if raw is None:
            return None
        try:
            return deserialize_project(raw)
        except EnvelopeError as exc:
            logger.warning("Project %s is unreadable: %s", guid, exc)
            return None

    def save_project(self, project: Project):
        """Write a project and add or refresh its entry in the listing."""
        self._write(get_project_storage_key(project.meta.guid),
                    serialize_project(project.meta, project.template, project.changes))
        self.save_listing(upsert_project_meta(self.load_listing(), project.meta))

    def load_region_plan(self, region: RegionID):
        raw = self._read(get_region_plan_storage_key(region))
        if raw is None:
            return create_region_plan(region)
        try:
            plan = region_plan_from_dict(json.loads(raw))
        except (json.JSONDecodeError, EnvelopeError) as exc:
            logger.warning("Region plan for %s is unreadable, starting empty: %s", region, exc)
            return create_region_plan(region)
        if plan.region != RegionID(region):
            logger.warning("Region plan file for %s holds region %s", region, plan.region)
            return create_region_plan(region)
        return plan

    def save_region_plan(self, plan):
        self._write(get_region_plan_storage_key(plan.region), json.dumps(region_plan_to_dict(plan)))
