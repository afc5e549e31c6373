from prosecheck.config import load_config
from prosecheck.state import PluginConfig


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.schema_version == 1
    assert cfg.debug is False
    assert [c.id for c in cfg.categories] == ["grammar", "style", "spelling"]
    assert cfg.skip_node_types == ["code_block"]
    assert cfg.logging.level == "WARNING"
    assert cfg.match_colours.debug_dirty == "f44336"


def test_plugin_config_from_model() -> None:
    plugin_config = PluginConfig.from_model(load_config(env={}))
    assert plugin_config.category_ids == ("grammar", "style", "spelling")
    assert plugin_config.categories[0].colour == "e53935"
    assert plugin_config.match_colours.hovered == "ffc107"
