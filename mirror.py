import logging
import os
import subprocess
import threading
from urllib.parse import quote, urlsplit, urlunsplit


class MirrorError(Exception):
  pass


def authenticated_repo_url(config):
  # Build git URL with credentials (for private repos)
  if not config.has_credentials:
    return config.repo_url

  parts = urlsplit(config.repo_url)
  host = parts.netloc.rpartition('@')[2]
  userinfo = f"{quote(str(config.username), safe='')}:{quote(str(config.password), safe='')}"
  return urlunsplit(parts._replace(netloc=f"{userinfo}@{host}"))


class MirrorManager:
  """Owns the local clone of the content repository."""

  def __init__(self, config):
    self.config = config
    self.path = config.mirror_dir

  def _git(self, args, cwd=None):
    env = dict(os.environ, GIT_TERMINAL_PROMPT='0')
    try:
      result = subprocess.run(["git"] + args,
                              cwd=cwd,
                              env=env,
                              capture_output=True,
                              text=True)
    except OSError as e:
      raise MirrorError(f"could not run git: {e}") from e

    if result.returncode != 0:
      message = result.stderr.strip() or result.stdout.strip()
      raise MirrorError(f"git {args[0]} exited with {result.returncode}: {message}")
    return result.stdout

  def clone(self):
    logging.info(f"Cloning repository into {self.path}...")
    self._git(["clone", authenticated_repo_url(self.config), str(self.path)])

  def pull(self):
    self._git(["pull"], cwd=self.path)

  def ensure_initialized(self):
    """Clone the repository if the mirror is missing, otherwise pull.

    A failed clone raises MirrorError; a failed pull is only logged.
    """
    if not self.path.exists():
      self.clone()
      logging.info("Repository cloned.")
    else:
      logging.info("Repository exists. Pulling latest...")
      self.refresh()

  def refresh(self):
    try:
      self.pull()
    except MirrorError as e:
      logging.error(f"Update failed: {e}")
      return False
    logging.info("Repository up to date.")
    return True


class RefreshScheduler(threading.Thread):
  """Background thread that pulls the mirror every `interval_minutes`."""

  def __init__(self, manager, interval_minutes):
    super().__init__(name="mirror-refresh", daemon=True)
    self.manager = manager
    self.interval = interval_minutes * 60
    self.stop_event = threading.Event()

  def run(self):
    while not self.stop_event.wait(self.interval):
      logging.info("Auto-updating repository...")
      try:
        self.manager.refresh()
      except Exception as e:
        logging.exception(f"Auto-update crashed: {e}")

  def stop(self, timeout=None):
    self.stop_event.set()
    if self.is_alive():
      self.join(timeout)


def start_refresh(manager, interval_minutes):
  if interval_minutes <= 0:
    logging.info("Auto-update disabled.")
    return None

  scheduler = RefreshScheduler(manager, interval_minutes)
  scheduler.start()
  logging.info(f"Auto-updating every {interval_minutes} minute(s).")
  return scheduler
