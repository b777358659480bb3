from .loop import run_headless, run_loop

__all__ = ["run_loop", "run_headless"]
