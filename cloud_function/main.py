# Cloud Functions source root: deploy cloud_function/ with --entry-point=ask
from peachtree_assistant.main import ask  # noqa: F401
