from mysqltrim.cli import main

main()
