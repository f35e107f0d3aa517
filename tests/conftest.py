"""
Pytest Fixtures
===============

Shared fixtures for query generator tests.
"""

import json
import sqlite3
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ai_query.catalog.sqlite import SQLiteCatalog
from ai_query.config import ConfigManager
from ai_query.generator import QueryGenerator
from ai_query.models import ProviderSelectionResult, VerificationStatus
from ai_query.providers.factory import ClientCreationResult
from ai_query.providers.mock import MockLLM

SAMPLE_DDL = """
CREATE TABLE customers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT,
    tier TEXT DEFAULT 'standard',
    created_at DATE
);
CREATE TABLE orders (
    id INTEGER PRIMARY KEY,
    customer_id INTEGER NOT NULL REFERENCES customers(id),
    amount REAL,
    status TEXT,
    order_date DATE
);
CREATE TABLE products (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    category TEXT,
    price REAL
);
CREATE INDEX idx_orders_customer ON orders (customer_id);
INSERT INTO customers (name, email, tier) VALUES
    ('Ada', 'ada@example.com', 'premium'),
    ('Grace', 'grace@example.com', 'standard');
INSERT INTO orders (customer_id, amount, status) VALUES
    (1, 120.5, 'shipped'),
    (1, 42.0, 'pending'),
    (2, 10.0, 'shipped');
"""

CONFIG_WITH_ANTHROPIC = """
[general]
log_level = DEBUG
enable_logging = true

[query]
enforce_limit = true
default_limit = 250

[anthropic]
api_key = "sk-ant-test"
default_model = claude-test
"""


def structured(sql: str, explanation: str = "", **fields) -> str:
    """Render a model reply as a fenced JSON payload."""
    payload = {"sql": sql, "explanation": explanation, **fields}
    return "```json\n" + json.dumps(payload) + "\n```"


@pytest.fixture
def write_config(tmp_path: Path):
    """Write configuration text to a temporary file and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "ai_query.config"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """ConfigManager pointed at a missing file, so defaults apply."""
    manager = ConfigManager(default_path=tmp_path / "missing.config")
    manager.load()
    return manager


@pytest.fixture
def anthropic_config_manager(write_config) -> ConfigManager:
    """ConfigManager with an Anthropic key configured."""
    manager = ConfigManager()
    assert manager.load(write_config(CONFIG_WITH_ANTHROPIC))
    return manager


@pytest.fixture
def sample_connection() -> sqlite3.Connection:
    """In-memory database with customers, orders and products."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.executescript(SAMPLE_DDL)
    yield conn
    conn.close()


@pytest.fixture
def catalog(sample_connection: sqlite3.Connection) -> SQLiteCatalog:
    """Catalog over the sample database."""
    return SQLiteCatalog(sample_connection)


@pytest.fixture
def mock_llm() -> MockLLM:
    """Mock LLM with structured replies for common requests."""
    return MockLLM(
        responses={
            "premium": [
                structured(
                    "SELECT name, email FROM customers WHERE tier = 'premium' LIMIT 250",
                    "Lists premium customers",
                    warnings=[],
                    row_limit_applied=True,
                    suggested_visualization="table",
                )
            ],
            "revenue by status": [
                structured(
                    "SELECT status, SUM(amount) FROM orders GROUP BY status",
                    "Sums order amounts per status",
                    suggested_visualization="bar",
                )
            ],
            "invoices": [
                structured("", "Table invoices does not exist. Available: customers, orders")
            ],
        }
    )


@pytest.fixture
def mock_factory(mock_llm: MockLLM):
    """Client factory that always hands out the mock LLM."""
    selections: list[ProviderSelectionResult] = []

    def _factory(selection: ProviderSelectionResult, config) -> ClientCreationResult:
        selections.append(selection)
        return ClientCreationResult(client=mock_llm, model_name="mock-model", success=True)

    _factory.selections = selections
    return _factory


@pytest.fixture
def generator(
    anthropic_config_manager: ConfigManager, catalog: SQLiteCatalog, mock_factory
) -> QueryGenerator:
    """Generator wired to the sample catalog and the mock LLM."""
    return QueryGenerator(anthropic_config_manager, catalog, client_factory=mock_factory)


def assert_verification_passed(result) -> None:
    """Helper assertion for verification results."""
    assert result.status == VerificationStatus.PASSED, f"Expected PASSED, got: {result.message}"


def assert_verification_failed(result) -> None:
    """Helper assertion for verification failures."""
    assert result.status == VerificationStatus.FAILED, f"Expected FAILED, got: {result.message}"
