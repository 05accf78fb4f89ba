"""Run the quickstart: index data/ and answer the default question."""

from src.hf_quickstart.main import main

if __name__ == "__main__":
    main()
