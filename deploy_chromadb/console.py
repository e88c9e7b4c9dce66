import logging
import os
import sys

logger = logging.getLogger("deploy_chromadb")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Console colors for logs
class bcolors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKORANGE = '\033[38;5;214m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

def _has_file_handler(log_file):
    path = os.path.abspath(log_file)
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return True
    return False

def configure_logging(log_file="", level=logging.INFO):
    """Set up stdout logging, plus an appending file handler when log_file is given."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(level)
    if log_file and not _has_file_handler(log_file):
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)

def print_info(msg):
    logger.info(f"{bcolors.OKBLUE}[INFO]{bcolors.ENDC} {msg}")

def print_build(msg):
    logger.info(f"{bcolors.OKORANGE}[BUILD]{bcolors.ENDC} {msg}")

def print_success(msg):
    logger.info(f"{bcolors.OKGREEN}[SUCCESS]{bcolors.ENDC} {msg}")

def print_warn(msg):
    logger.warning(f"{bcolors.WARNING}[WARNING]{bcolors.ENDC} {msg}")

def print_error(msg):
    logger.error(f"{bcolors.FAIL}[ERROR]{bcolors.ENDC} {msg}")
