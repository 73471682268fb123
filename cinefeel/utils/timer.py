import logging
import time
from colorama import Fore, Style, init

# Initializes colorama for Windows terminal compatibility
init(autoreset=True)

logger = logging.getLogger(__name__)


class ExecutionTimer:
    """
    Context Manager to measure and log the execution time of code blocks.
    """

    def __init__(self, step_name: str):
        self.step_name = step_name
        self.start_time = 0.0
        self.duration = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        logger.info(f"{Fore.CYAN}[STARTING] {self.step_name}...{Style.RESET_ALL}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time

        # Color based on duration (Green for fast, Red for slow)
        color = Fore.GREEN
        if self.duration > 2.0: color = Fore.YELLOW
        if self.duration > 5.0: color = Fore.RED

        status = "FAILED" if exc_type else "FINISHED"
        logger.info(f"{color}[{status}] {self.step_name} -> {self.duration:.4f} sec{Style.RESET_ALL}")
