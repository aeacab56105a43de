# topmark:header:start
#
#   project      : FtMemo
#   file         : __init__.py
#   file_relpath : src/ftmemo/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for FtMemo.

- `ftmemo.config.logging`: logger class, TRACE level and colored output.
- `ftmemo.config.keys`: canonical TOML key names.
- `ftmemo.config.io`: TOML loading, typed getters and rendering (tomlkit).
- `ftmemo.config.model`: the immutable `Config` and its `MutableConfig` builder.

This package module stays import-light so that `ftmemo.config.logging` can be
imported from anywhere without pulling in the config model.
"""
