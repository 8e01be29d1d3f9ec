"""Dataset file loading for the CLI.

A dataset is a YAML or JSON document with ``tasks``, ``completions`` and
``goals`` lists, in the row shape the persistence layer exports.
"""

import json
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ..models.task import Completion, Goal, Task


@dataclass
class Dataset:
    tasks: List[Task] = field(default_factory=list)
    completions: List[Completion] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        return cls(
            tasks=[Task.from_dict(row) for row in data.get('tasks') or []],
            completions=[Completion.from_dict(row) for row in data.get('completions') or []],
            goals=[Goal.from_dict(row) for row in data.get('goals') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'goals': [g.to_dict() for g in self.goals],
            'tasks': [t.to_dict() for t in self.tasks],
            'completions': [c.to_dict() for c in self.completions],
        }


def load_dataset(dataset_path: str) -> Dataset:
    """Load a dataset from YAML or JSON file."""
    path = Path(dataset_path)

    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {dataset_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported dataset file format: {path.suffix}")

    return Dataset.from_dict(data or {})


def dump_dataset(dataset: Dataset, dataset_path: str) -> Path:
    """Write a dataset as YAML or JSON, chosen by file suffix."""
    path = Path(dataset_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            yaml.safe_dump(dataset.to_dict(), f, sort_keys=False)
        else:
            json.dump(dataset.to_dict(), f, indent=2)

    return path
