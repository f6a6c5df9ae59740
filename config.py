"""Module to create the githubapp Configs"""

from githubapp import Config


def default_configs() -> None:
    """Create the default configs"""
    Config.BOT_NAME = "presubmit-trigger[bot]"

    Config.create_config(
        "trigger",
        enabled=True,
        elide_skipped_contexts=False,
        presubmits=[],
    )
