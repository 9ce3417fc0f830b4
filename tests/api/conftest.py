from __future__ import annotations

from typing import Iterator

import pytest

pytest.importorskip("fastapi")

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.studio.config import AppConfig
from src.studio.main import create_app


@pytest.fixture
def studio_app() -> FastAPI:
    return create_app(AppConfig.build_default())


@pytest.fixture
def client(studio_app: FastAPI) -> Iterator[TestClient]:
    with TestClient(studio_app) as test_client:
        yield test_client
