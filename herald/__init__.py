"""
HERALD - Heuristic Extraction of Reminders And Loose Dictation

Turns a single freeform line of dictated or typed text into a structured task
draft: a clean title, an optional schedule or deadline instant, and an
optional matched project.

Architecture:
- Parsing Context: Date extraction, project matching, title normalization
- Intake Context: Candidate project lookup and task-record mapping
"""

__version__ = "0.1.0"
