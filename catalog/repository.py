# catalog/repository.py

import copy
import itertools
import json
import logging
import threading
import uuid
from dataclasses import asdict, replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from django.utils import timezone

from .models import File, FileInput, Reasoner, ReasonerInput, Scenario, ScenarioInput

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


class EntityTable:
    """
    One in-memory collection of entities keyed by id.

    Every row remembers its insertion sequence. When ``ordered_by`` names a
    timestamp attribute, selections come back newest-first with the
    insertion sequence breaking ties (earlier insert first); otherwise they
    come back in insertion order.
    """

    def __init__(self, name: str, ordered_by: Optional[str] = None):
        self.name = name
        self.ordered_by = ordered_by
        self._rows: Dict[str, Tuple[int, object]] = {}
        self._sequence = itertools.count()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def insert(self, entity) -> None:
        with self._lock:
            if entity.id in self._rows:
                raise KeyError(f"Duplicate {self.name} id '{entity.id}'.")
            self._rows[entity.id] = (next(self._sequence), entity)

    def get(self, entity_id: str):
        with self._lock:
            row = self._rows.get(entity_id)
        return row[1] if row else None

    def remove(self, entity_id: str) -> bool:
        with self._lock:
            return self._rows.pop(entity_id, None) is not None

    def select(self, **filters) -> list:
        """
        Returns the entities whose attributes equal every given filter value.
        A filter whose value is None is ignored.
        """
        active = {field: value for field, value in filters.items() if value is not None}
        with self._lock:
            rows = list(self._rows.values())

        matched = [
            (sequence, entity) for sequence, entity in rows
            if all(getattr(entity, field) == value for field, value in active.items())
        ]
        matched.sort(key=lambda row: row[0])
        if self.ordered_by:
            # Stable, so equal timestamps keep insertion order.
            matched.sort(key=lambda row: getattr(row[1], self.ordered_by), reverse=True)
        return [entity for _, entity in matched]

    def search(self, query: str, texts: Callable[[object], Iterable[str]], **filters) -> list:
        """
        Narrows ``select(**filters)`` to entities where ``query`` occurs,
        case-insensitively, in any of the strings ``texts(entity)`` yields.
        """
        needle = query.casefold()
        return [
            entity for entity in self.select(**filters)
            if any(needle in text.casefold() for text in texts(entity))
        ]


def _file_search_texts(file: File) -> Iterable[str]:
    yield file.original_name
    yield file.filename
    if file.metadata is not None:
        yield json.dumps(file.metadata, separators=(',', ':'), ensure_ascii=False, default=str)


def _detached(file: Optional[File]) -> Optional[File]:
    """A File whose metadata the caller may mutate without touching the stored record."""
    if file is None or file.metadata is None:
        return file
    return replace(file, metadata=copy.deepcopy(file.metadata))


def _scenario_search_texts(scenario: Scenario) -> Iterable[str]:
    yield scenario.title
    yield scenario.description
    yield scenario.content


class CatalogRepository:
    """
    Acts as the data access layer for the catalog.
    All reads and writes of Files, Reasoners and Scenarios go through this class.

    One instance is built when the catalog app starts and is shared by every
    request; see ``catalog.apps.get_repository``.
    """

    def __init__(self):
        self.files = EntityTable('file', ordered_by='uploaded_at')
        self.reasoners = EntityTable('reasoner')
        self.scenarios = EntityTable('scenario', ordered_by='created_at')

    # --- Files ---

    def list_files(self, *, category: Optional[str] = None, section: Optional[str] = None,
                   file_type: Optional[str] = None) -> List[File]:
        files = self.files.select(category=category, section=section, file_type=file_type)
        return [_detached(file) for file in files]

    def get_file(self, file_id: str) -> Optional[File]:
        return _detached(self.files.get(str(file_id)))

    def create_file(self, data: FileInput) -> File:
        file = File(id=new_id(), uploaded_at=timezone.now(), **asdict(data))
        self.files.insert(file)
        logger.info(f"Created file {file.id} ('{file.original_name}', {file.category}/{file.section}/{file.file_type}).")
        return _detached(file)

    def delete_file(self, file_id: str) -> bool:
        removed = self.files.remove(str(file_id))
        if removed:
            logger.info(f"Deleted file record {file_id}.")
        return removed

    def search_files(self, query: str, *, category: Optional[str] = None, section: Optional[str] = None,
                     file_type: Optional[str] = None) -> List[File]:
        files = self.files.search(
            query, _file_search_texts,
            category=category, section=section, file_type=file_type,
        )
        return [_detached(file) for file in files]

    # --- Reasoners ---

    def list_reasoners(self, *, category: Optional[str] = None) -> List[Reasoner]:
        return self.reasoners.select(category=category)

    def get_reasoner(self, reasoner_id: str) -> Optional[Reasoner]:
        return self.reasoners.get(str(reasoner_id))

    def create_reasoner(self, data: ReasonerInput) -> Reasoner:
        reasoner = Reasoner(id=new_id(), **asdict(data))
        self.reasoners.insert(reasoner)
        logger.info(f"Created reasoner {reasoner.id} ('{reasoner.name}').")
        return reasoner

    # --- Scenarios ---

    def list_scenarios(self, *, category: Optional[str] = None) -> List[Scenario]:
        return self.scenarios.select(category=category)

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return self.scenarios.get(str(scenario_id))

    def create_scenario(self, data: ScenarioInput) -> Scenario:
        scenario = Scenario(id=new_id(), created_at=timezone.now(), **asdict(data))
        self.scenarios.insert(scenario)
        logger.info(f"Created scenario {scenario.id} ('{scenario.title}').")
        return scenario

    def search_scenarios(self, query: str, *, category: Optional[str] = None) -> List[Scenario]:
        return self.scenarios.search(query, _scenario_search_texts, category=category)
