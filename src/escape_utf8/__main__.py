from escape_utf8.cli import main

main()
