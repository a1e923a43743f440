from javadecl.cli import main

main()
