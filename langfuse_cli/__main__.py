from langfuse_cli.cli import main

main()
