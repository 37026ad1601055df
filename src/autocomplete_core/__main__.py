from autocomplete_core.main import cli

if __name__ == "__main__":
    cli()
