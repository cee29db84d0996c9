from hostidentity.cli import main

main()
