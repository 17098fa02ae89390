from img2code.cli import app

app()
