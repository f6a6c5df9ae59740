"""This module contains the main application logic."""

import logging
import os
import sys

import sentry_sdk
from flask import Flask
from flask.cli import load_dotenv
from githubapp import webhook_handler
from githubapp.events import CheckSuiteRequestedEvent, CheckSuiteRerequestedEvent

from config import default_configs
from src.managers import trigger_manager

logging.basicConfig(
    stream=sys.stdout,
    format="%(levelname)s:%(module)s:%(funcName)s:%(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def sentry_init() -> None:  # pragma: no cover
    """Initialize sentry only if SENTRY_DSN is present"""
    if sentry_dsn := os.getenv("SENTRY_DSN"):
        # Initialize Sentry SDK for error logging
        sentry_sdk.init(
            dsn=sentry_dsn,
            traces_sample_rate=1.0,
            profiles_sample_rate=1.0,
        )
        logger.info("Sentry initialized")


app = Flask(__name__)
sentry_init()
webhook_handler.handle_with_flask(app, use_default_index=False, config_file=".trigger.yaml")

load_dotenv()
default_configs()


@webhook_handler.add_handler(CheckSuiteRequestedEvent)
def handle_check_suite_requested(event: CheckSuiteRequestedEvent) -> None:
    """
    handle the Check Suite Request event
    Calling the Trigger manager to:
    - Submit the always_run presubmits
    - Report the other presubmits as skipped
    """
    trigger_manager.manage(event)


@webhook_handler.add_handler(CheckSuiteRerequestedEvent)
def handle_check_suite_rerequested(event: CheckSuiteRerequestedEvent) -> None:
    """handle the Check Suite Rerequest event, submitting all the presubmits again"""
    trigger_manager.retrigger(event)


def create_tables() -> str:  # pragma: no cover
    """Create the database tables"""
    from src.helpers.db_helper import BaseModelService

    for subclass in BaseModelService.__subclasses__():
        logger.info(f"Creating table for {subclass.clazz.__name__}")
        subclass.create_table()
    return "OK"
