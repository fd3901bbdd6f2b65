import pytest


class TestSimplifierConfig:
    def test_defaults(self):
        from saral.config import SimplifierConfig

        config = SimplifierConfig()
        assert config.top_n == 5
        assert config.similarity_threshold == 0.7
        assert config.split_threshold == 20
        assert config.fallback_chars == 300
        assert config.seed is None

    def test_from_dict_accepts_section_or_document(self):
        from saral.config import SimplifierConfig

        assert SimplifierConfig.from_dict({"simplifier": {"top_n": 2}}).top_n == 2
        assert SimplifierConfig.from_dict({"top_n": 4}).top_n == 4
        assert SimplifierConfig.from_dict(None) == SimplifierConfig()
        assert SimplifierConfig.from_dict({"simplifier": None}) == SimplifierConfig()

    def test_unknown_keys_are_ignored_with_warning(self, caplog):
        from saral.config import SimplifierConfig

        with caplog.at_level("WARNING", logger="saral.config"):
            config = SimplifierConfig.from_dict({"simplifier": {"colour": "red", "seed": 3}})
        assert config.seed == 3
        assert any("colour" in r.message for r in caplog.records)

    def test_non_mapping_section_raises(self):
        from saral.config import SimplifierConfig

        with pytest.raises(ValueError):
            SimplifierConfig.from_dict({"simplifier": [1, 2]})

    @pytest.mark.parametrize(
        "key, value",
        [
            ("top_n", "five"),
            ("keyword_count", 2.5),
            ("similarity_threshold", "high"),
            ("split_threshold", True),
            ("seed", "abc"),
        ],
    )
    def test_wrongly_typed_value_raises_with_key(self, key, value):
        from saral.config import SimplifierConfig

        with pytest.raises(ValueError, match=key):
            SimplifierConfig.from_dict({"simplifier": {key: value}})

    def test_numeric_values_are_coerced(self):
        from saral.config import SimplifierConfig

        config = SimplifierConfig.from_dict(
            {"simplifier": {"similarity_threshold": 1, "seed": None, "top_n": 2}}
        )
        assert config.similarity_threshold == 1.0
        assert isinstance(config.similarity_threshold, float)
        assert config.seed is None
        assert config.top_n == 2

    def test_load_config_from_yaml(self, tmp_path):
        from saral.config import load_config

        path = tmp_path / "saral.yaml"
        path.write_text(
            "simplifier:\n  top_n: 3\n  keyword_count: 6\n  seed: 11\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert (config.top_n, config.keyword_count, config.seed) == (3, 6, 11)

    def test_load_empty_yaml_gives_defaults(self, tmp_path):
        from saral.config import SimplifierConfig, load_config

        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == SimplifierConfig()

    def test_load_missing_file_raises(self, tmp_path):
        from saral.config import load_config

        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_load_non_mapping_raises(self, tmp_path):
        from saral.config import load_config

        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)


class TestTextIO:
    def test_read_utf8_with_bom(self, tmp_path):
        from saral.utils.io import read_text

        path = tmp_path / "bom.txt"
        path.write_bytes("\ufeffNamaste duniya".encode("utf-8"))
        assert read_text(path) == "Namaste duniya"

    def test_read_non_utf8_always_returns_text(self, tmp_path):
        from saral.utils.io import read_text

        path = tmp_path / "latin.txt"
        path.write_bytes("Café prices rose sharply this year in the old town.".encode("latin-1"))
        text = read_text(path)
        assert isinstance(text, str)
        assert "prices rose sharply" in text

    def test_collect_text_files(self, tmp_path):
        from saral.utils.io import collect_text_files

        (tmp_path / "b.txt").write_text("b", encoding="utf-8")
        (tmp_path / "a.md").write_text("a", encoding="utf-8")
        (tmp_path / "c.json").write_text("{}", encoding="utf-8")

        assert [p.name for p in collect_text_files(tmp_path)] == ["a.md", "b.txt"]
        assert collect_text_files(tmp_path / "b.txt") == [tmp_path / "b.txt"]
        assert collect_text_files(tmp_path / "c.json") == []
        assert collect_text_files(tmp_path / "missing") == []


class TestDataFiles:
    def test_bundled_tables_load(self):
        from saral.utils.data import load_json

        assert "english" in load_json("stopwords.json")
        assert "verbs" in load_json("complex_to_simple.json")
        assert "markers" in load_json("hinglish.json")

    def test_missing_table_returns_empty(self, caplog):
        from saral.utils.data import load_json

        with caplog.at_level("ERROR", logger="saral.utils.data"):
            assert load_json("does_not_exist.json") == {}
        assert caplog.records
