from workflow.orchestrator import save_job

__all__ = ["save_job"]
