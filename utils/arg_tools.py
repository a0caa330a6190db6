import argparse
import os
import sys
from types import SimpleNamespace
from typing import Any, Dict, Optional

import yaml

PROFILE_OPTIONS = ("comment", "begin", "end", "parent", "uid")


class ProfileArgumentError(ValueError):
    """Raised when ``profile()`` receives an argument list it cannot interpret."""


def parse_profile_args(args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize the accepted ``profile()`` call shapes into one options dict.

    Accepted shapes:
      * ``profile()`` / ``profile("comment")``  -> comment shorthand
      * ``profile(begin="x", comment="c")``     -> keyword options
      * ``profile("begin", "x", "comment", "c")`` -> flat name/value pairs

    Returns:
        dict with every key of ``PROFILE_OPTIONS``; ``comment`` is never None.
    """
    if len(args) <= 1:
        params = dict(kwargs)
        if args:
            params["comment"] = args[0]
    elif len(args) % 2 != 0:
        raise ProfileArgumentError(
            "profile() requires a single comment parameter or a list of name-value pairs; "
            f"found {len(args)} values: {', '.join(map(str, args))}"
        )
    else:
        params = dict(zip(args[::2], args[1::2]))
        params.update(kwargs)

    unknown = sorted(str(k) for k in params if k not in PROFILE_OPTIONS)
    if unknown:
        raise ProfileArgumentError(
            f"profile() got unknown option(s): {', '.join(unknown)}; "
            f"expected any of {', '.join(PROFILE_OPTIONS)}"
        )

    options = {key: params.get(key) for key in PROFILE_OPTIONS}
    options["comment"] = options["comment"] or ""
    return options


def load_config(config_path: Optional[str] = None, configs_dir: str = "configs") -> Dict[str, Any]:
    """
    Load config from YAML files.

    ``<configs_dir>/base.yaml`` holds the defaults, ``config_path`` overrides them.
    """
    cfg = {}

    # base defaults
    with open(os.path.join(configs_dir, "base.yaml")) as f:
        cfg.update(yaml.safe_load(f) or {})

    # config overrides
    if config_path:
        with open(config_path) as f:
            cfg.update(yaml.safe_load(f) or {})

    return cfg

def merge_cli(
        cfg: dict,
        cli: argparse.Namespace,
        unknown_cli: list[str],
        argv: list[str] | None = None):
    """
    Merge precedence (lowest → highest):
      1. cfg dict   (already contains YAML values)
      2. explicit *known* CLI flags
      3. key/value pairs given in `unknown_cli`
    """
    if argv is None:                    # allows easier unit-testing
        argv = sys.argv[1:]

    explicit = _explicit_cli_keys(argv)

    # known flags first
    for k, v in vars(cli).items():
        if k in explicit or k not in cfg:
            cfg[k] = v

    # unknown flags come as ["--table_width", "120", "--color", "false"]
    key = None
    for tok in unknown_cli:
        if tok.startswith("--"):
            key = tok.lstrip("-")
        else:
            cfg[key] = yaml.safe_load(tok)
    return SimpleNamespace(**cfg)

def _explicit_cli_keys(argv: list[str]) -> set[str]:
    """
    Return the set of `--flag` names that **actually appeared**
    on the command line (ignores values).
    """
    keys = set()
    for tok in argv:
        if tok.startswith("--"):
            key = tok.lstrip("-")
            # strip any trailing "=value" (handled by `prog --steps=5`)
            key = key.split("=", 1)[0]
            keys.add(key)
    return keys
