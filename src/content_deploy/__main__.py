"""Allow `python -m content_deploy`."""

from .cli.deploy import main

if __name__ == "__main__":
    main(prog_name="content-deploy")
