"""Shared fixtures: an in-memory MongoDB and an app wired to it."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from chatapp.core.config import Settings, get_settings
from chatapp.database.connection import mongo_db_dependency
from chatapp.main import create_app
from chatapp.repositories.chat_repository import ChatRepository
from chatapp.repositories.message_repository import MessageRepository
from chatapp.repositories.user_repository import UserRepository
from chatapp.services.chat_service import ChatService


@pytest.fixture
def settings() -> Settings:
    return Settings(mongodb_db="chatapp_test", cors_origin="https://chat.example.com", log_level="DEBUG")


@pytest.fixture
def mock_db():
    """A fresh mongomock-backed Motor database per test."""
    client = AsyncMongoMockClient()
    return client["chatapp_test"]


@pytest.fixture
def chat_repo(mock_db) -> ChatRepository:
    return ChatRepository(mock_db)


@pytest.fixture
def message_repo(mock_db) -> MessageRepository:
    return MessageRepository(mock_db)


@pytest.fixture
def user_repo(mock_db) -> UserRepository:
    return UserRepository(mock_db)


@pytest.fixture
def chat_service(chat_repo, message_repo) -> ChatService:
    return ChatService(message_repo, chat_repo, summary_update_attempts=3)


@pytest.fixture
def app(settings, mock_db):
    # lifespan is not entered (no `with TestClient`), so no real MongoDB is touched
    application = create_app(settings)
    application.dependency_overrides[mongo_db_dependency] = lambda: mock_db
    application.dependency_overrides[get_settings] = lambda: settings
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
