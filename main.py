import argparse
import logging
import signal
import sys

from app import create_app
from mirror import MirrorError, MirrorManager, start_refresh
from settings import ConfigError, config_path_from_env, load_config

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def parse_args(argv=None):
  parser = argparse.ArgumentParser(
    description="Serve markdown docs from a git repository.")
  parser.add_argument("--config",
                      default=config_path_from_env(),
                      help="path to the JSON config file (default: %(default)s)")
  parser.add_argument("--debug",
                      action="store_true",
                      help="enable debug logging")
  return parser.parse_args(argv)


def serve(config):
  manager = MirrorManager(config)
  # Blocks until the mirror exists; a failed clone propagates
  manager.ensure_initialized()

  scheduler = start_refresh(manager, config.update_interval_minutes)
  app = create_app(config)
  try:
    logging.info(f"Server running at http://localhost:{config.port}")
    app.run(host=config.host, port=config.port)
  finally:
    if scheduler is not None:
      scheduler.stop()
      logging.info("Auto-update stopped.")


def _exit_on_sigterm(signum, frame):
  sys.exit(0)


def main(argv=None):
  args = parse_args(argv)
  logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                      format=LOG_FORMAT)

  try:
    config = load_config(args.config)
  except ConfigError as e:
    logging.error(f"Invalid configuration: {e}")
    return 1

  signal.signal(signal.SIGTERM, _exit_on_sigterm)
  try:
    serve(config)
  except MirrorError as e:
    logging.error(f"Failed to start: {e}")
    return 1
  except KeyboardInterrupt:
    logging.info("Shutting down.")
  return 0


if __name__ == '__main__':
  sys.exit(main())
