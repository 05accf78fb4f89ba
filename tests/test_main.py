"""
CLI tests. Failures in query mode are never caught by main(); an uncaught
exception is what gives the process its non-zero exit status.
"""

import pytest

import src.hf_quickstart.main as cli

from conftest import INFO_TEXT, TEST_TEXT

pytestmark = pytest.mark.unit


class TestParseArgs:

    def test_no_arguments_means_default_query(self):
        args = cli.parse_args([])

        assert args.mode == "query"
        assert args.question is None
        assert args.config is None

    def test_query_with_question(self):
        args = cli.parse_args(["query", "What is this?", "--top-k", "3"])

        assert args.question == "What is this?"
        assert args.top_k == 3

    def test_unknown_mode_rejected(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["index"])


class TestBuildConfig:

    def test_cli_overrides_yaml(self, tmp_path):
        path = tmp_path / "quickstart.yaml"
        path.write_text("data_dir: docs\nsimilarity_top_k: 4\n")
        args = cli.parse_args([
            "--config", str(path),
            "--data-dir", "other",
            "--embed-model", "sentence-transformers/all-MiniLM-L6-v2",
            "--log", "-v",
        ])

        cfg = cli._build_config(args)

        assert cfg.data_dir == "other"
        assert cfg.similarity_top_k == 4
        assert cfg.embed_model_name == "sentence-transformers/all-MiniLM-L6-v2"
        assert cfg.log_queries is True
        assert cfg.verbose is True

    def test_bad_top_k_rejected(self):
        with pytest.raises(ValueError):
            cli._build_config(cli.parse_args(["--top-k", "0"]))


class TestQueryMode:

    def test_default_run_prints_response(self, tmp_path, data_dir, mock_embed, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)  # data_dir fixture lives at tmp_path/data

        cli.main([])

        out = capsys.readouterr().out
        assert INFO_TEXT in out
        assert TEST_TEXT in out

    def test_explicit_question(self, data_dir, mock_embed, capsys):
        cli.main(["query", "Which documents test embeddings?", "--data-dir", str(data_dir)])

        out = capsys.readouterr().out
        assert "Which documents test embeddings?" in out

    def test_show_sources(self, data_dir, mock_embed, capsys):
        cli.main(["--data-dir", str(data_dir), "--show-sources"])

        out = capsys.readouterr().out
        assert "Retrieved Chunks  (2 chunk(s))" in out
        assert "file_name: info.txt" in out

    def test_empty_data_dir_fails_without_response(self, tmp_path, mock_embed, capsys):
        empty = tmp_path / "data"
        empty.mkdir()

        with pytest.raises(FileNotFoundError):
            cli.main(["--data-dir", str(empty)])

        out = capsys.readouterr().out
        assert INFO_TEXT not in out
        assert "Context information" not in out

    def test_missing_data_dir_fails(self, tmp_path, mock_embed):
        with pytest.raises(FileNotFoundError):
            cli.main(["--data-dir", str(tmp_path / "absent")])

    def test_bad_embed_model_fails_before_query(self, data_dir, monkeypatch, capsys):
        import src.hf_quickstart.pipeline as pipeline

        def broken(cfg):
            raise OSError(f"{cfg.embed_model_name} is not a valid model identifier")

        monkeypatch.setattr(pipeline, "build_embed_model", broken)

        with pytest.raises(OSError):
            cli.main(["--data-dir", str(data_dir), "--embed-model", "no/such-model"])

        assert "Context information" not in capsys.readouterr().out

    def test_log_flag_writes_json(self, tmp_path, data_dir, mock_embed, monkeypatch):
        monkeypatch.chdir(tmp_path)

        cli.main(["--data-dir", str(data_dir), "--log"])

        logs = list((tmp_path / "logs" / "quickstart").glob("run_*.json"))
        assert len(logs) == 1


class TestChatMode:

    def test_chat_answers_until_exit(self, data_dir, mock_embed, monkeypatch, capsys):
        answers = iter(["What is LlamaIndex?", "", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

        cli.main(["chat", "--data-dir", str(data_dir)])

        out = capsys.readouterr().out
        assert INFO_TEXT in out
        assert out.rstrip().endswith("Goodbye!")

    def test_chat_stops_on_eof(self, data_dir, mock_embed, monkeypatch, capsys):
        def eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", eof)

        cli.main(["chat", "--data-dir", str(data_dir)])

        assert "Goodbye!" in capsys.readouterr().out


class TestDoctorMode:

    def test_healthy_dir_exits_cleanly(self, data_dir, cache_env, capsys):
        cli.main(["doctor", "--data-dir", str(data_dir)])

        out = capsys.readouterr().out
        assert "info.txt" in out
        assert "looks good" in out

    def test_missing_dir_exits_non_zero(self, tmp_path, cache_env):
        with pytest.raises(SystemExit) as exc:
            cli.main(["doctor", "--data-dir", str(tmp_path / "absent")])

        assert exc.value.code == 1

    def test_plain_doctor_leaves_cache_absent(self, data_dir, cache_env, capsys):
        cli.main(["doctor", "--data-dir", str(data_dir)])

        assert not cache_env.exists()
        assert "(absent)" in capsys.readouterr().out

    def test_clear_cache_without_cache(self, data_dir, cache_env, capsys):
        cli.main(["doctor", "--data-dir", str(data_dir), "--clear-cache"])

        assert not cache_env.exists()
        assert "No cache directory" in capsys.readouterr().out

    def test_clear_existing_cache(self, data_dir, cache_env, capsys):
        (cache_env / "models").mkdir(parents=True)

        cli.main(["doctor", "--data-dir", str(data_dir), "--clear-cache"])

        assert not cache_env.exists()
        assert "Removed cache directory" in capsys.readouterr().out

    def test_extension_filter_matches_loader(self, tmp_path, data_dir, cache_env, mock_embed):
        path = tmp_path / "quickstart.yaml"
        path.write_text("required_exts: ['.md']\n")

        with pytest.raises(SystemExit) as exc:
            cli.main(["doctor", "--config", str(path), "--data-dir", str(data_dir)])
        assert exc.value.code == 1

        # query mode with the same settings fails the same way
        with pytest.raises(FileNotFoundError):
            cli.main(["--config", str(path), "--data-dir", str(data_dir)])
