"""Configuration loading and validation for notecal.

Main components:
- loader.ConfigLoader: Locate, load and validate notecal.yaml
- env_loader.substitute_env_vars: ${VAR_NAME} substitution
- validator.flatten_pydantic_errors: Readable messages for config and events
- defaults: Default file names, heading and color

Submodules are imported directly; the models import ``defaults`` and the
loader imports the models.
"""
