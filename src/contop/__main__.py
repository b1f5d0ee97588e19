from contop.app import main

main()
