from pkgmeta.cli.main import app

app(prog_name="pkgmeta")
