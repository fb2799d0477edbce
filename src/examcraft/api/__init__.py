"""HTTP API for examcraft.

FastAPI routes over the ExamCraft orchestrator. The application object
lives in examcraft.api.app so that importing this package does not
build it.
"""
