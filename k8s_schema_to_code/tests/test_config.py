import pytest

from k8s_schema_to_code.config import CodeGeneratorConfig, OutputMode


class TestConfig:
    """Generator configuration"""

    def test_defaults(self):
        config = CodeGeneratorConfig()
        assert config.language == "python"
        assert config.definition_prefix == "io.k8s."
        assert config.ref_prefix == "#/definitions/"
        assert config.output.mode == OutputMode.FORCE
        assert not config.formatter.enabled

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            CodeGeneratorConfig(language="cs")

    def test_from_dict(self):
        config = CodeGeneratorConfig.from_dict(
            {
                "language": "ts",
                "definition_prefix": "com.example.",
                "ignore_definitions": ["com.example.Hidden"],
                "formatter": {"enabled": True, "line_length": 100},
                "output": {"mode": "error", "atomic_write": False},
                "unknown_option": 1,
            }
        )
        assert config.language == "ts"
        assert config.definition_prefix == "com.example."
        assert config.ignore_definitions == ["com.example.Hidden"]
        assert config.formatter.enabled
        assert config.formatter.line_length == 100
        assert config.output.mode == OutputMode.ERROR_IF_EXISTS
        assert not config.output.atomic_write
        assert config.output.validate_before_write

    def test_from_dict_validates_language(self):
        with pytest.raises(ValueError):
            CodeGeneratorConfig.from_dict({"language": "go"})

    def test_to_dict_round_trip(self):
        config = CodeGeneratorConfig(language="ts", ignore_definitions=["a"])
        config.output.mode = OutputMode.ERROR_IF_EXISTS
        assert CodeGeneratorConfig.from_dict(config.to_dict()) == config
