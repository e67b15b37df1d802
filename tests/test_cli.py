import json

import pytest

from iot_registry.cli import main
from iot_registry.hashing import digest


@pytest.fixture
def run_cli(tmp_path, capsys):
    db = str(tmp_path / "cli.db")

    def run(*args):
        code = main(["--backend", "sqlite", "--uri", db, *args])
        out, err = capsys.readouterr()
        return code, (json.loads(out) if out.strip() else None), err

    return run


def test_init_then_list(run_cli):
    code, seeded, _ = run_cli("init")
    assert code == 0
    assert seeded["asset"] == ["SN-1", "SN-2"]
    assert seeded["hash"][0] == digest("empreinte1")

    code, assets, _ = run_cli("asset", "list")
    assert code == 0
    assert [a["id"] for a in assets] == ["SN-1", "SN-2"]


def test_find_asset_by_mac(run_cli):
    run_cli("init")
    code, asset, _ = run_cli("asset", "find", "--mac", "00:0a:95:9d:68:16")
    assert code == 0
    assert asset["id"] == "SN-1"

    code, asset, _ = run_cli("asset", "find", "--attr", "idCloudProvider", "cloud_provider_2")
    assert asset["id"] == "SN-2"


def test_missing_mac_is_an_error(run_cli):
    run_cli("init")
    code, out, err = run_cli("asset", "find", "--mac", "ff:ff")
    assert code == 1
    assert out is None
    assert "ff:ff" in err


def test_create_asset_and_duplicate(run_cli):
    code, asset, _ = run_cli("asset", "create", "SN-3", "c3", "fp3", "mac3", "f3")
    assert code == 0
    assert asset["docType"] == "asset"

    code, _, err = run_cli("asset", "create", "SN-3", "c3", "fp3", "mac3", "f3")
    assert code == 1
    assert "already exists" in err

    code, exists, _ = run_cli("asset", "exists", "SN-3")
    assert exists is True


def test_hash_store_and_verify(run_cli):
    code, rec, _ = run_cli("hash", "store", "fp-cli")
    assert code == 0
    assert rec == {"hash": digest("fp-cli")}

    code, result, _ = run_cli("hash", "verify", "fp-cli")
    assert result["matched"] is True
    assert result["digest"] == digest("fp-cli")

    code, result, _ = run_cli("hash", "verify", "other")
    assert result["matched"] is False

    code, _, err = run_cli("hash", "store", "fp-cli")
    assert code == 1


def test_read_missing_asset(run_cli):
    code, _, err = run_cli("asset", "read", "SN-404")
    assert code == 1
    assert "SN-404" in err
