from chesskernel.app import main

main()
