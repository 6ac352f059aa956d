"""
Module 04 - CLI Tests

Drives txmerkle_cli.main.main() in-process:
1. build prints the root (human and JSON)
2. prove writes a proof document; absent targets exit 2
3. verify accepts good proofs, rejects tampered ones with exit 2
4. library errors exit 1 without a traceback
5. config --init / --show
"""
import json
import logging

import pytest

from fixtures import dh, flip_hex_char, reference_root
from txmerkle_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test in an empty directory with no user config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield tmp_path
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


TX_IDS = ["tx1", "tx2", "tx3", "tx4"]


class TestBuildCommand:

    def test_prints_root(self, capsys):
        code = main(["build", *TX_IDS])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert out.strip() == f"Merkle root: {reference_root(TX_IDS)}"

    def test_json_with_layers(self, capsys):
        code = main(["build", "a", "b", "c", "--json", "--layers"])
        data = json.loads(capsys.readouterr().out)

        assert code == EXIT_SUCCESS
        assert data["root"] == reference_root(["a", "b", "c"])
        assert data["layer_count"] == 3
        assert data["layers"][-1]["hashes"] == [dh("a"), dh("b"), dh("c")]

    def test_human_layers(self, capsys):
        main(["build", "a", "b", "--layers"])
        out = capsys.readouterr().out

        assert "level 0 (base, 2 node(s))" in out
        assert dh("a") in out

    def test_leaves_from_file(self, tmp_path, capsys):
        leaf_file = tmp_path / "ids.txt"
        leaf_file.write_text("tx3\n\ntx4\n")

        code = main(["build", "tx1", "tx2", "--file", str(leaf_file), "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == EXIT_SUCCESS
        assert data["root"] == reference_root(TX_IDS)
        assert data["leaf_count"] == 4

    def test_no_leaves_is_error(self, capsys):
        code = main(["build"])
        err = capsys.readouterr().err

        assert code == EXIT_RUNTIME_ERROR
        assert "INVALID_INPUT" in err
        assert "no leaves supplied" in err

    def test_error_as_json(self, capsys):
        code = main(["build", "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == EXIT_RUNTIME_ERROR
        assert data["error"]["code"] == "INVALID_INPUT"

    def test_output_format_from_config(self, tmp_path, capsys):
        (tmp_path / "txmerkle.json").write_text(json.dumps({"output": {"format": "json"}}))

        main(["build", "a"])
        data = json.loads(capsys.readouterr().out)

        assert data["root"] == dh("a")

    def test_max_leaves_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("TXMERKLE_MAX_LEAVES", "2")

        code = main(["build", "a", "b", "c"])

        assert code == EXIT_RUNTIME_ERROR
        assert "limit is 2" in capsys.readouterr().err

    def test_missing_leaf_file(self, capsys):
        code = main(["build", "--file", "does-not-exist.txt"])
        assert code == EXIT_RUNTIME_ERROR

    def test_leaf_file_not_utf8(self, tmp_path, capsys):
        leaf_file = tmp_path / "ids.txt"
        leaf_file.write_bytes(b"tx1\n\xff\xfe\n")

        code = main(["build", "--file", str(leaf_file)])

        assert code == EXIT_RUNTIME_ERROR
        assert "INVALID_INPUT" in capsys.readouterr().err

    def test_prove_leaf_file_not_utf8(self, tmp_path, capsys):
        leaf_file = tmp_path / "ids.txt"
        leaf_file.write_bytes(b"\xff")

        assert main(["prove", "tx1", "tx1", "--file", str(leaf_file)]) == EXIT_RUNTIME_ERROR

    def test_leaf_file_keeps_surrounding_whitespace(self, tmp_path, capsys):
        leaf_file = tmp_path / "ids.txt"
        leaf_file.write_bytes(b" tx1\r\ntx2 \n   \n")

        main(["build", "--file", str(leaf_file), "--json"])
        data = json.loads(capsys.readouterr().out)

        assert data["root"] == reference_root([" tx1", "tx2 "])
        assert data["leaf_count"] == 2


class TestProveAndVerify:

    def test_prove_human(self, capsys):
        code = main(["prove", "tx3", *TX_IDS])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert "Steps:     2" in out
        assert dh("tx4") in out

    def test_prove_absent_exits_2(self, capsys):
        code = main(["prove", "tx9", *TX_IDS, "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == EXIT_VERIFICATION_FAILED
        assert data == {"present": False, "leaf_id": "tx9"}

    def test_prove_then_verify(self, tmp_path, capsys):
        proof_path = tmp_path / "out" / "proof.json"

        assert main(["prove", "tx3", *TX_IDS, "--out", str(proof_path)]) == EXIT_SUCCESS
        capsys.readouterr()

        saved = json.loads(proof_path.read_text())
        assert saved["leaf_id"] == "tx3"
        assert saved["root"] == reference_root(TX_IDS)
        assert len(saved["steps"]) == 2

        code = main(["verify", "--proof", str(proof_path), "--json"])
        report = json.loads(capsys.readouterr().out)

        assert code == EXIT_SUCCESS
        assert report["ok"] is True
        assert report["steps"] == 2

    def test_verify_against_other_root_fails(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", "tx1", *TX_IDS, "--out", str(proof_path)])
        capsys.readouterr()

        wrong_root = flip_hex_char(reference_root(TX_IDS))
        code = main(["verify", "--proof", str(proof_path), "--root", wrong_root])
        out = capsys.readouterr().out

        assert code == EXIT_VERIFICATION_FAILED
        assert "INVALID" in out

    def test_verify_other_leaf_fails(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", "tx1", *TX_IDS, "--out", str(proof_path)])
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_path), "--leaf", "tx2"])
        assert code == EXIT_VERIFICATION_FAILED

    def test_verify_tampered_sibling_fails(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", "tx2", *TX_IDS, "--out", str(proof_path)])
        capsys.readouterr()

        doc = json.loads(proof_path.read_text())
        doc["steps"][0]["sibling"] = flip_hex_char(doc["steps"][0]["sibling"])
        proof_path.write_text(json.dumps(doc))

        code = main(["verify", "--proof", str(proof_path), "--json"])
        report = json.loads(capsys.readouterr().out)

        assert code == EXIT_VERIFICATION_FAILED
        assert report["root_ok"] is False
        assert report["leaf_hash_ok"] is True

    def test_verify_missing_proof_file(self, tmp_path, capsys):
        code = main(["verify", "--proof", str(tmp_path / "none.json")])

        assert code == EXIT_RUNTIME_ERROR
        assert "PROOF_FORMAT_ERROR" in capsys.readouterr().err

    def test_verify_garbage_proof_file(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        proof_path.write_text("[]")

        code = main(["verify", "--proof", str(proof_path)])

        assert code == EXIT_RUNTIME_ERROR

    def test_verify_proof_file_not_utf8(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        proof_path.write_bytes(b"\xff\xfe{}")

        code = main(["verify", "--proof", str(proof_path)])

        assert code == EXIT_RUNTIME_ERROR
        assert "PROOF_FORMAT_ERROR" in capsys.readouterr().err


class TestMisc:

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out

    def test_config_init_and_show(self, tmp_path, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (tmp_path / "txmerkle.json").exists()
        capsys.readouterr()

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR
        capsys.readouterr()

        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["engine"]["max_leaves"] == 0
        assert shown["output"]["format"] == "human"

    def test_bad_config_file(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("output:\n  format: xml\n")

        code = main(["--config", str(bad), "build", "a"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_null_log_level_in_config(self, tmp_path, capsys):
        (tmp_path / "txmerkle.json").write_text(json.dumps({"logging": {"level": None}}))

        code = main(["build", "a"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
