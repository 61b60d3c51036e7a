from docship.cli.app import main

main()
