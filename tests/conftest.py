"""Pytest configuration and shared fixtures."""

import pytest

from sitegate.permissions import PermissionFlag, grant


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "logging": {
            "level": "debug",
            "log_dir": "/tmp/sitegate-logs",
            "file_logging": False,
        },
        "redaction": {
            "default_fields": ["cost", "price"],
            "policies": {
                "change_order": ["amount", "markup"],
                "project": ["budget"],
            },
        },
    }


@pytest.fixture
def scope_items():
    """Scope item rows as returned by the backend."""
    return [
        {
            "id": "s-1",
            "description": "Curtain wall panels",
            "quantity": 40,
            "unit_cost": 1250.0,
            "total_cost": 50000.0,
            "actual_cost": 48100.0,
            "initial_cost": 47000.0,
            "cost_variance": 1100.0,
        },
        {
            "id": "s-2",
            "description": "Steel stairs",
            "quantity": 2,
            "unit_cost": 9000.0,
            "total_cost": 18000.0,
        },
    ]


@pytest.fixture
def financial_caps():
    """Capability set holding only VIEW_FINANCIAL_DATA."""
    return grant(0, PermissionFlag.VIEW_FINANCIAL_DATA)


@pytest.fixture
def project():
    return {"id": "p-100", "name": "Harbor Tower", "created_by": "u-owner"}
