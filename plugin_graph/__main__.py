from plugin_graph.cli import main

main()
