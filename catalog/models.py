# catalog/models.py
"""
Catalog entities.

The catalog keeps its records in memory, so these are plain frozen dataclasses
rather than ORM models. The closed vocabularies are Django ``TextChoices`` so
serializers can reuse them as choice lists.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from django.db import models


class Category(models.TextChoices):
    SCENE_GRAPHS = 'scene-graphs', 'Scene Graphs'
    ROBOT_WORLD = 'robot-world', 'Robot Meets World'


class Section(models.TextChoices):
    SPECIFICATION = 'specification', 'Specification'
    DATASET = 'dataset', 'Dataset'
    SOLUTION = 'solution', 'Solution'


class FileType(models.TextChoices):
    IMAGE = 'image', 'Image'
    JSON = 'json', 'JSON'
    TEXT = 'text', 'Text'
    ONTOLOGY = 'ontology', 'Ontology'
    TPTP = 'tptp', 'TPTP'
    OTHER = 'other', 'Other'


def _check_choice(choices, field_name: str, value) -> None:
    if value not in choices.values:
        raise ValueError(f"Invalid {field_name} '{value}'. Expected one of: {', '.join(choices.values)}.")


# --- Creation inputs: everything except the server-assigned fields ---

@dataclass(frozen=True)
class FileInput:
    filename: str
    original_name: str
    mimetype: str
    size: str
    category: str
    section: str
    file_type: str
    metadata: Optional[Any] = None

    def __post_init__(self):
        _check_choice(Category, 'category', self.category)
        _check_choice(Section, 'section', self.section)
        _check_choice(FileType, 'fileType', self.file_type)


@dataclass(frozen=True)
class ReasonerInput:
    name: str
    description: str
    url: str
    category: str

    def __post_init__(self):
        _check_choice(Category, 'category', self.category)


@dataclass(frozen=True)
class ScenarioInput:
    title: str
    description: str
    content: str
    category: str

    def __post_init__(self):
        _check_choice(Category, 'category', self.category)


# --- Stored entities ---

@dataclass(frozen=True)
class File:
    """An uploaded artifact. ``filename`` names the stored payload."""
    id: str
    filename: str
    original_name: str
    mimetype: str
    size: str
    category: str
    section: str
    file_type: str
    uploaded_at: datetime
    metadata: Optional[Any] = None


@dataclass(frozen=True)
class Reasoner:
    """A link to an external theorem prover."""
    id: str
    name: str
    description: str
    url: str
    category: str


@dataclass(frozen=True)
class Scenario:
    id: str
    title: str
    description: str
    content: str
    category: str
    created_at: datetime
