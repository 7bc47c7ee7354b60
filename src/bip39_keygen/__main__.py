from bip39_keygen.cli.main import app

app(prog_name="bip39-keygen")
