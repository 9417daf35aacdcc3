from pathlib import Path

import pytest

from yaml_nested import config as config_module
from yaml_nested.config import (
    ConverterConfig,
    JsonInput,
    JsonOutput,
    MetricsConfig,
    YamlInput,
    YamlOutput,
    get_config,
)

REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str) -> str:
        path = tmp_path / "converter-config.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


def test_load_full_config(write_config):
    path = write_config("""
input:
  type: json
  path: flat.json
converter:
  mode: unflatten
output:
  type: yaml
  indent: 4
metrics:
  textfile: /tmp/yaml_nested.prom
logging:
  level: DEBUG
""")
    cfg = ConverterConfig.load(path)
    assert isinstance(cfg.input, JsonInput)
    assert cfg.input.path == "flat.json"
    assert cfg.converter.mode == "unflatten"
    assert isinstance(cfg.output, YamlOutput)
    assert cfg.output.indent == 4
    assert cfg.metrics.textfile == "/tmp/yaml_nested.prom"
    assert cfg.logging.level == "DEBUG"


def test_load_defaults(write_config):
    path = write_config("""
input: {type: yaml}
converter: {mode: flatten}
output: {type: json}
""")
    cfg = ConverterConfig.load(path)
    assert isinstance(cfg.input, YamlInput)
    assert cfg.input.path is None
    assert isinstance(cfg.output, JsonOutput)
    assert cfg.output.indent == 4
    assert cfg.metrics.textfile is None
    assert cfg.logging.level == "INFO"


def test_get_config_uses_config_path(write_config, monkeypatch):
    path = write_config("input: {type: yaml}\nconverter: {mode: flatten}\noutput: {type: yaml}\n")
    monkeypatch.setattr(config_module, "CONFIG_PATH", path)
    assert get_config().converter.mode == "flatten"


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        ConverterConfig.load(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("text", [
    "",
    "input: {type: yaml}\nconverter: {mode: sideways}\noutput: {type: yaml}\n",
    "input: {type: toml}\nconverter: {mode: flatten}\noutput: {type: yaml}\n",
    "input: {type: yaml}\nconverter: {mode: flatten}\noutput: {type: yaml, indent: 1}\n",
    "input: {type: yaml}\noutput: {type: yaml}\n",
])
def test_invalid_config(write_config, text):
    with pytest.raises(ValueError, match="Invalid configuration"):
        ConverterConfig.load(write_config(text))


def test_metrics_textfile_must_be_prom():
    assert MetricsConfig(textfile="metrics.prom").textfile == "metrics.prom"
    with pytest.raises(ValueError, match=".prom"):
        MetricsConfig(textfile="metrics.txt")


def test_shipped_config_is_valid():
    cfg = ConverterConfig.load(str(REPO_ROOT / "config" / "converter-config.yaml"))
    assert cfg.converter.mode == "flatten"


@pytest.mark.parametrize("model, data", [
    (JsonOutput, {"type": "json", "indent": 2}),
    (MetricsConfig, {"textfile": "run.prom"}),
])
def test_models_log_initialization(caplog, model, data):
    with caplog.at_level("DEBUG", logger="yaml_nested.config"):
        model(**data)
    assert f"Initializing {model.__name__} with data" in caplog.text
