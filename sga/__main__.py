from .cli.sga import main

main()
