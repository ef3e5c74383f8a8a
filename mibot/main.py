"""mibot entry point."""

import argparse
import logging
import sys

from mibot.config.settings import Config
from mibot.dispatcher import Dispatcher
from mibot.slack_handler import SlackHandler
from mibot.tools.k8s_tools import KubeClient, load_kube_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Slack bot answering kubectl-style queries")
    parser.add_argument(
        "--kubeconfig",
        default=Config.KUBECONFIG,
        help="absolute path to the kubeconfig file",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Start mibot."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    try:
        Config.validate()
        load_kube_config(args.kubeconfig)
        kube = KubeClient(request_timeout=Config.KUBE_REQUEST_TIMEOUT)
        handler = SlackHandler(
            Config.SLACK_BOT_TOKEN,
            Config.SLACK_APP_TOKEN,
            debug=Config.SLACK_DEBUG,
        )
        logger.info("Starting mibot...")
        handler.connect()
    except ValueError as e:
        logger.error(f"Config error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Startup error: {e}")
        sys.exit(1)

    try:
        Dispatcher(handler, kube, bot_name=Config.BOT_NAME).run()
    finally:
        handler.close()


if __name__ == "__main__":
    main()
