"""
Intake Context

Responsibilities:
- Fetches candidate projects for a user from the project store
- Runs the dictation parser (or skips it on request)
- Maps parsed intake onto the task-creation contract

Owns: The boundary between task utterances and stored records
Never: Analyzes text itself or writes tasks
"""
