import pytest

from actorgraph.cli import pathfinder_main, popularity_main, predictor_main

from conftest import DATASET_HEADER, SAMPLE_RECORDS, write_tsv


def read_lines(path):
    return path.read_text(encoding="utf-8").split("\n")


@pytest.fixture
def pairs_file(tmp_path):
    return write_tsv(tmp_path / "pairs.tsv", "Actor1\tActor2", [("B", "D"), ("A", "C")])


@pytest.fixture
def targets_file(tmp_path):
    return write_tsv(tmp_path / "targets.tsv", "Actor", ["A", "D"])


class TestPathfinder:
    def test_weighted(self, dataset_file, pairs_file, tmp_path):
        out = tmp_path / "out_paths.tsv"
        assert pathfinder_main([str(dataset_file), "w", str(pairs_file), str(out)]) == 0
        assert read_lines(out) == [
            "(actor)--[movie#@year]-->(actor)--...",
            "(B)--[M1#@2000]-->(A)--[M2#@2010]-->(D)",
            "(A)--[M1#@2000]-->(C)",
            "",
        ]

    def test_no_path_line(self, tmp_path):
        data = write_tsv(
            tmp_path / "data.tsv", DATASET_HEADER,
            list(SAMPLE_RECORDS) + [("E", "M3", "2001"), ("F", "M3", "2001")],
        )
        pairs = write_tsv(tmp_path / "pairs.tsv", "Actor1\tActor2", [("E", "A")])
        out = tmp_path / "out.tsv"
        assert pathfinder_main([str(data), "u", str(pairs), str(out)]) == 0
        assert read_lines(out)[1] == "(E)"

    def test_unknown_actor_aborts_without_output(self, dataset_file, tmp_path, capsys):
        pairs = write_tsv(tmp_path / "pairs.tsv", "Actor1\tActor2", [("A", "B"), ("A", "Nobody")])
        out = tmp_path / "out.tsv"
        assert pathfinder_main([str(dataset_file), "u", str(pairs), str(out)]) == 1
        assert "Nobody" in capsys.readouterr().out
        assert not out.exists()

    def test_malformed_pair_row_aborts(self, dataset_file, tmp_path, capsys):
        pairs = write_tsv(tmp_path / "pairs.tsv", "Actor1\tActor2", [("A", "B"), ("C",)])
        out = tmp_path / "out.tsv"
        assert pathfinder_main([str(dataset_file), "u", str(pairs), str(out)]) == 1
        assert "expected 2 fields" in capsys.readouterr().out
        assert not out.exists()

    def test_missing_dataset(self, pairs_file, tmp_path, capsys):
        out = tmp_path / "out.tsv"
        assert pathfinder_main([str(tmp_path / "nope.tsv"), "u", str(pairs_file), str(out)]) == 1
        assert "Error opening file" in capsys.readouterr().out

    def test_malformed_dataset(self, pairs_file, tmp_path, capsys):
        data = write_tsv(tmp_path / "data.tsv", DATASET_HEADER, [("A", "M1", "2000"), ("B", "M1")])
        out = tmp_path / "out.tsv"
        assert pathfinder_main([str(data), "u", str(pairs_file), str(out)]) == 1
        assert "expected 3 fields" in capsys.readouterr().out

    def test_bad_mode(self, dataset_file, pairs_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            pathfinder_main([str(dataset_file), "x", str(pairs_file), str(tmp_path / "out.tsv")])
        assert excinfo.value.code == 1
        assert "incorrect arguments" in capsys.readouterr().out

    def test_wrong_argument_count(self, dataset_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            pathfinder_main([str(dataset_file), "u"])
        assert excinfo.value.code == 1
        assert "usage: pathfinder" in capsys.readouterr().out


class TestPredictor:
    def test_writes_both_files(self, dataset_file, targets_file, tmp_path):
        predicted = tmp_path / "predicted.tsv"
        recommended = tmp_path / "recommended.tsv"
        argv = [str(dataset_file), str(targets_file), str(predicted), str(recommended)]
        assert predictor_main(argv) == 0
        assert read_lines(predicted) == ["Actor1,Actor2,Actor3,Actor4", "B\tC", "", ""]
        assert read_lines(recommended) == ["Actor1,Actor2,Actor3,Actor4", "", "B\tC", ""]

    def test_unknown_target(self, dataset_file, tmp_path, capsys):
        targets = write_tsv(tmp_path / "targets.tsv", "Actor", ["A", "Nobody"])
        predicted = tmp_path / "predicted.tsv"
        recommended = tmp_path / "recommended.tsv"
        argv = [str(dataset_file), str(targets), str(predicted), str(recommended)]
        assert predictor_main(argv) == 1
        assert "Nobody" in capsys.readouterr().out
        assert not predicted.exists() and not recommended.exists()

    def test_wrong_argument_count(self, dataset_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            predictor_main([str(dataset_file)])
        assert excinfo.value.code == 1


class TestPopularityFinder:
    def test_k_core(self, dataset_file, tmp_path):
        out = tmp_path / "pop.tsv"
        assert popularity_main([str(dataset_file), "2", str(out)]) == 0
        assert read_lines(out) == ["Actor", "A", "B", "C", ""]

    def test_non_integer_k(self, dataset_file, tmp_path, capsys):
        out = tmp_path / "pop.tsv"
        assert popularity_main([str(dataset_file), "two", str(out)]) == 1
        assert "not a base-10 integer" in capsys.readouterr().out
        assert not out.exists()

    def test_unwritable_output(self, dataset_file, tmp_path, capsys):
        out = tmp_path / "missing_dir" / "pop.tsv"
        assert popularity_main([str(dataset_file), "1", str(out)]) == 1
        assert "Error opening file" in capsys.readouterr().out
