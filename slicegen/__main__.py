from slicegen.cli import main

main()
