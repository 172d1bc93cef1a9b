from peppemon_installer.main import main

main()
