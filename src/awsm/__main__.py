from awsm.cli import main

main()
