from quickchoice.cli import app

app()
