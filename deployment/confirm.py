from typing import Any, Dict

from ape.utils import ZERO_ADDRESS


def _abort_unless_confirmed(question: str) -> None:
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    _abort_unless_confirmed(f"Deploy {contract_name}")


def _continue() -> None:
    """Asks the user to continue."""
    _abort_unless_confirmed("Continue")


def _confirm_initializer(
    contract_name: str, initializer: str, named_args: Dict[str, Any]
) -> None:
    """Shows the initializer call made through the proxy and asks for confirmation."""
    print(f"\nInitializer {contract_name}.{initializer}")
    for name, value in named_args.items():
        print(f"\t{name}={value}")
    _confirm_deployment(contract_name)
    if ZERO_ADDRESS in named_args.values():
        _abort_unless_confirmed("Zero Address detected for initializer argument; Continue?")
