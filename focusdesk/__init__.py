# focusdesk: local priority matrix + AI blueprint organizer
#
# Components:
#   config.py    - YAML configuration (Config)
#   kvstore.py   - SQLite key-value persistence shared by both features
#   state.py     - Immutable application state and per-action reducers
#   matrix/      - Quadrant classifier and priority board
#   blueprint/   - IR normalizer, KCS chunker/exporter, saved profiles, file exchange
#   cli.py       - Command line entry point

__version__ = "0.1.0"
