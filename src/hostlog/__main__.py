from hostlog.cli import app

app(prog_name="hostlog")
