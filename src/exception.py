import click


class CLIException(Exception):
    def __init__(self, *args, description: str = "Something happend..."):
        click.echo(description, err=True)
        super().__init__(*args or (description,))
        self.description = description
