from gather_stream.run import main

main()
