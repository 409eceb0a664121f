from datemath.hooks import DataObservabilityHooks

HOOKS = (DataObservabilityHooks(),)
