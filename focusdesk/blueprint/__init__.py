# Blueprint organizer: Instructional Ruleset (IR) + Knowledge Compendium Synthesis (KCS)
#
# Components:
#   schema.py     - Data model (Blueprint, DocumentChunk, SavedProfile, ExportFormat)
#   normalizer.py - IR -> headered Markdown
#   chunker.py    - KCS -> fixed-size word chunks with metadata
#   exporter.py   - Chunk serialization (JSON / JSON Lines) and parsing
#   profiles.py   - Saved blueprint collection over the key-value store
#   files.py      - Text import and export blob naming/writing
