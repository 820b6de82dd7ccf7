"""Surface complexity metrics for triangle meshes: geometry helpers, per-triangle layers, jittered averaging and RUG output."""

__version__ = "0.87.0"
__all__ = ["geometry", "metric_info", "metric_manager", "jitter_sets", "jitter"]