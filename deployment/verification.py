import time

from eth_typing import ChecksumAddress


def wait_for_explorer(delay: int, subject: str) -> None:
    print(
        f"Waiting {delay} seconds before verification so explorer can index the {subject}..."
    )
    time.sleep(delay)


def verify_safe(toolkit, address: ChecksumAddress, **extra) -> bool:
    """
    Submits the contract at address for source verification.

    Explorer errors (including "already verified") are reported and swallowed;
    verification never decides the outcome of a deployment.
    Returns True if the explorer accepted the submission.
    """
    try:
        toolkit.verify(address, **extra)
    except Exception as e:
        print(f"WARNING: Verification skipped/failed for {address}: {e}")
        return False
    return True
