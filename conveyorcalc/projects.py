"""
File-backed project storage.

Each saved project keeps its metadata plus the ``{input, result}`` pair
exactly as produced by ``to_dict``. The calculation never sees this module.
"""
import json
import logging
import os
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .models import ConveyorInput, ConveyorResult

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".conveyorcalc" / "projects.json"


@dataclass
class ProjectInfo:
    project_name: str = ""
    client_name: str = ""
    project_number: str = ""
    date: str = ""
    engineer: str = ""


@dataclass
class SavedProject:
    id: str
    name: str
    client: str
    created_at: str
    updated_at: str
    info: ProjectInfo = field(default_factory=ProjectInfo)
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def conveyor_input(self) -> ConveyorInput:
        return ConveyorInput.from_dict(self.data["input"])

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SavedProject":
        raw = dict(raw)
        raw["info"] = ProjectInfo(**raw.get("info", {}))
        return cls(**raw)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return "proj_" + uuid.uuid4().hex[:12]


class ProjectStore:
    """JSON list of projects in a single file."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else DEFAULT_STORE_PATH

    def _write(self, projects: List[SavedProject]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump([asdict(p) for p in projects], fh, indent=2)
        os.replace(tmp, self.path)

    def all(self) -> List[SavedProject]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
            return [SavedProject.from_dict(p) for p in raw]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Ignoring unreadable project store %s: %s", self.path, e)
            return []

    def get(self, project_id: str) -> Optional[SavedProject]:
        for p in self.all():
            if p.id == project_id:
                return p
        return None

    def save(self, info: ProjectInfo, inp: ConveyorInput,
             result: Optional[ConveyorResult] = None) -> SavedProject:
        projects = self.all()
        stamp = _now()
        project = SavedProject(
            id=_new_id(),
            name=info.project_name,
            client=info.client_name,
            created_at=stamp,
            updated_at=stamp,
            info=info,
            data={"input": inp.to_dict(), "result": result.to_dict() if result else None},
        )
        projects.append(project)
        self._write(projects)
        logger.info("Saved project %s (%s)", project.id, project.name or "unnamed")
        return project

    def update(self, project_id: str, info: Optional[ProjectInfo] = None,
               inp: Optional[ConveyorInput] = None,
               result: Optional[ConveyorResult] = None) -> Optional[SavedProject]:
        projects = self.all()
        for project in projects:
            if project.id != project_id:
                continue
            if info is not None:
                project.info = info
                project.name = info.project_name
                project.client = info.client_name
            if inp is not None:
                project.data["input"] = inp.to_dict()
                # a stale result would no longer match the input
                project.data["result"] = result.to_dict() if result else None
            elif result is not None:
                project.data["result"] = result.to_dict()
            project.updated_at = _now()
            self._write(projects)
            return project
        return None

    def delete(self, project_id: str) -> bool:
        projects = self.all()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) == len(projects):
            return False
        self._write(remaining)
        return True

    def clear(self):
        if self.path.exists():
            self.path.unlink()
