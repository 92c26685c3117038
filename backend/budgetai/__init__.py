"""Budget AI backend: ingestion of generative-model responses into budgeting insights."""
