import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "assets_test.db"
    # Point the registry at this temp DB
    os.environ["ASSET_DB_PATH"] = str(path)
    from registry.db import DDL
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(DDL)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("ASSET_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM team_member")
        conn.execute("DELETE FROM asset")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def store(tmp_db_path):
    from registry.services.asset_store import AssetStore
    s = AssetStore.open(tmp_db_path)
    yield s
    s.close()


@pytest.fixture()
def client(store):
    from registry.api import create_app
    from fastapi.testclient import TestClient
    return TestClient(create_app(store))


@pytest.fixture()
def make_asset():
    """Fully populated, already normalized asset; keyword overrides per test."""
    from registry.domain.asset import CryptoAsset

    def _make(**overrides):
        fields = dict(
            name="bitcoin",
            symbol="btc",
            description="The original cryptocurrency",
            team=["Satoshi Nakamoto"],
            ico_amount=0.0,
            block_reward=12.5,
            funding_status="no-ico",
            founded_date="2009-01-03",
            coin_type="currency",
            website="https://bitcoin.org/en/",
        )
        fields.update(overrides)
        return CryptoAsset(**fields)

    return _make
