import pathlib
import re

import yaml


def test_config_file_exists_and_has_no_keys():
    root = pathlib.Path(__file__).resolve().parents[1]
    cfg = root / "config.yaml"
    assert cfg.exists(), "config.yaml missing at project root"
    text = cfg.read_text(encoding="utf-8")

    raw_key = re.compile(r"[0-9a-fA-F]{64}")
    assert not any(raw_key.search(line) for line in text.splitlines()), "config.yaml contains a private key"

    data = yaml.safe_load(text)
    for name, net in data["networks"].items():
        for acct in net["accounts"]:
            assert "${" in acct, f"{name} account is not an env template"
