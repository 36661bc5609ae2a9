"""Shared fixtures."""

import json

import pytest

from college_resolver.config_loader import Config
from college_resolver.dataset import parse_records
from college_resolver.service import CollegeResolutionService

INSTITUTIONS = [
    {"id": 1, "name": "SUNY Maritime College", "alias": "", "city": "Bronx", "state": "NY",
     "latitude": 40.8069, "longitude": -73.7949},
    {"id": 2, "name": "Harvard University", "alias": "Harvard", "city": "Cambridge", "state": "MA",
     "latitude": 42.3770, "longitude": -71.1167},
    {"id": 3, "name": "Hobart William Smith Colleges", "alias": "", "city": "Geneva", "state": "NY"},
    {"id": 4, "name": "Example University (Main Campus)", "city": "Springfield", "state": "IL"},
    {"id": 5, "name": "Example University Graduate School", "city": "Springfield", "state": "IL"},
    {"id": 7, "name": "Harvey Mudd College", "alias": "", "city": "Claremont", "state": "CA"},
    {"id": 8, "name": "North Harvest Technical College", "alias": "", "city": "Fargo", "state": "ND"},
    {"id": 9, "name": "University of Michigan-Flint", "alias": "UM-Flint", "city": "Flint", "state": "MI"},
    {"id": 10, "name": "Saint Mary's College", "alias": "", "city": "Notre Dame", "state": "IN"},
    {"id": 11, "name": "Saint Mary's College Online", "alias": "", "city": "Notre Dame", "state": "IN"},
    {"id": 12, "name": "Columbia College", "alias": "", "city": "Chicago", "state": "IL"},
    {"id": 13, "name": "Columbia College", "alias": "", "city": "Chicago", "state": "IL"},
    {"id": 14, "name": "University of the Pacific", "alias": "", "city": "Stockton", "state": "CA"},
    {"unitid": 15, "name": "Lake Cook Institute", "alias": None, "city": "Waukegan", "state": "IL"},
]


@pytest.fixture
def institutions():
    return [dict(row) for row in INSTITUTIONS]


@pytest.fixture
def records(institutions):
    return parse_records(institutions, "fixture")


@pytest.fixture
def dataset_path(tmp_path, institutions):
    path = tmp_path / "institutions.json"
    path.write_text(json.dumps(institutions), encoding="utf-8")
    return path


@pytest.fixture
def config(dataset_path):
    return Config(DATASET_PATH=str(dataset_path))


@pytest.fixture
def service(config):
    return CollegeResolutionService.create(config)
