# Priority matrix: keyword-based quadrant classification and the task board
#
# Components:
#   schema.py     - Data model (Quadrant, PriorityItem)
#   classifier.py - Rule-based urgent/important keyword classifier
#   board.py      - Board persistence over the key-value store
