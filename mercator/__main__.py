from mercator.cli import main

main()
