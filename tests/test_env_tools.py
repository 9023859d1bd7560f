from pulsecheck.utils.env_tools import DEFAULT_CONFIG, ensure_dirs, env_flag, load_config


def test_load_config_backfills_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("PULSECHECK_SCORING_VARIANT", raising=False)
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("app:\n  title: Custom\nanimation:\n  interval_s: 0.1\n")
    cfg = load_config(cfg_file)
    assert cfg["app"]["title"] == "Custom"
    assert cfg["app"]["default_theme"] == "dark"
    assert cfg["animation"]["interval_s"] == 0.1
    assert cfg["animation"]["total_delay_s"] == 2.5
    assert cfg["store"]["path"] == DEFAULT_CONFIG["store"]["path"]
    assert cfg["scoring"]["variant"] == "detailed"


def test_missing_config_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("PULSECHECK_SCORING_VARIANT", raising=False)
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg["scoring"]["variant"] == "detailed"
    assert cfg["animation"]["counter_max_frames"] == 60


def test_variant_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("PULSECHECK_SCORING_VARIANT", "compact")
    assert load_config(tmp_path / "absent.yaml")["scoring"]["variant"] == "compact"


def test_env_flag(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PULSECHECK_TEST_FLAG", "yes")
    assert env_flag("PULSECHECK_TEST_FLAG") is True
    monkeypatch.setenv("PULSECHECK_TEST_FLAG", "off")
    assert env_flag("PULSECHECK_TEST_FLAG") is False
    monkeypatch.delenv("PULSECHECK_TEST_FLAG")
    assert env_flag("PULSECHECK_TEST_FLAG", default=True) is True


def test_ensure_dirs(tmp_path):
    target = tmp_path / "data" / "store" / "local_store.json"
    ensure_dirs({"store": {"path": str(target)}})
    assert target.parent.is_dir()
