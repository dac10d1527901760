import importlib

main_module = importlib.import_module("{{main/ns}}.__main__")


def test_greet():
    assert main_module.greet("{{developer}}") == "Hello, {{developer}}!"


def test_main_prints_greeting(capsys):
    assert main_module.main(["there"]) == 0
    assert capsys.readouterr().out == "Hello, there!\n"
