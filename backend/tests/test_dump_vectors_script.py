"""Tests for scripts/dump_vectors.py."""
import json

import numpy as np
import pytest

from scripts import dump_vectors

F32_EPSILON = float(np.finfo(np.float32).eps)


class TestDumpVectors:
    def test_default_seeds_reproduce_fixture(self, reference_vectors):
        vectors = dump_vectors.build_vectors(dump_vectors.DEFAULT_SEEDS, 5)

        assert vectors["count"] == 5
        assert set(vectors["cases"]) == set(reference_vectors["cases"])
        for seed, case in reference_vectors["cases"].items():
            dumped = vectors["cases"][seed]
            assert dumped["rangeInt"] == case["rangeInt"]
            assert dumped["value"] == pytest.approx(case["value"], abs=F32_EPSILON)
            assert dumped["rangeFloat"] == pytest.approx(case["rangeFloat"], abs=F32_EPSILON)

    def test_main_writes_json_file(self, tmp_path, capsys):
        out_path = tmp_path / "nested" / "vectors.json"

        exit_code = dump_vectors.main(["--seeds", "1", "2", "--count", "3", "--out", str(out_path)])

        assert exit_code == 0
        payload = json.loads(out_path.read_text())
        assert sorted(payload["cases"]) == ["1", "2"]
        assert all(len(v) == 3 for v in payload["cases"]["2"].values())
        assert "Wrote 2 seeds" in capsys.readouterr().out

    def test_main_prints_to_stdout(self, capsys):
        assert dump_vectors.main(["--seeds", "0", "--count", "1"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["cases"]["0"]["rangeInt"] == [1900725526]

    def test_count_must_be_positive(self):
        with pytest.raises(SystemExit):
            dump_vectors.main(["--count", "0"])

    def test_existing_output_is_not_overwritten(self, tmp_path):
        out_path = tmp_path / "vectors.json"
        out_path.write_text("keep")

        with pytest.raises(SystemExit):
            dump_vectors.main(["--seeds", "1", "--out", str(out_path)])
        assert out_path.read_text() == "keep"

    def test_force_overwrites_output(self, tmp_path):
        out_path = tmp_path / "vectors.json"
        out_path.write_text("stale")

        assert dump_vectors.main(["--seeds", "1", "--out", str(out_path), "--force"]) == 0
        assert json.loads(out_path.read_text())["count"] == 5

    def test_fixture_is_not_generated_by_this_package(self, reference_vectors):
        assert "independent" in reference_vectors["description"]
