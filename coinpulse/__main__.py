from coinpulse.cli import main

main()
