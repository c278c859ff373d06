from tasktracker.cli import main

main()
