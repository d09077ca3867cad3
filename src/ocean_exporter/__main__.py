from ocean_exporter.main import main

main()
