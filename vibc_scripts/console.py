"""Terminal output helpers shared by the scripts."""

import sys


class Colors:
    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_section(title: str):
    """Print a section header"""
    print(f"\n{Colors.HEADER}{'='*70}{Colors.ENDC}")
    print(f"{Colors.HEADER}{title}{Colors.ENDC}")
    print(f"{Colors.HEADER}{'='*70}{Colors.ENDC}\n")


def print_ok(message: str):
    print(f"{Colors.OKGREEN}[OK] {message}{Colors.ENDC}")


def print_info(message: str):
    print(f"{Colors.OKBLUE}[*] {message}{Colors.ENDC}")


def print_warning(message: str):
    print(f"{Colors.WARNING}[!] {message}{Colors.ENDC}")


def print_error(message: str):
    print(f"{Colors.FAIL}[X] {message}{Colors.ENDC}", file=sys.stderr)
