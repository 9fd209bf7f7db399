"""Run the kustomize-adapter command line tool."""

from kustomize_adapter.tool.main import main

if __name__ == "__main__":
    main()
