from cratecite.cli.main import main

main()
