from .survey_app import run_app

__all__ = ["run_app"]
