from pokeviewer.main import main

main()
