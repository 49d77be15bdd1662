import argparse
import sys
from delay_reporter.policy import PolicyValidationError, get_policy_loader
from delay_reporter.runtime.delay import run_delayed_report

def main():
    parser = argparse.ArgumentParser(
        description="Delay Reporter: wait 5 seconds, then print the working directory."
    )
    parser.parse_args()

    try:
        verbose = get_policy_loader().is_verbose()
    except PolicyValidationError as e:
        print(f"Delay report failed: {e}", file=sys.stderr, flush=True)
        sys.exit(1)

    run_delayed_report(verbose=verbose)

if __name__ == "__main__":
    main()
