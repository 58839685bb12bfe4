from playbook_toolkit.cli import main

main()
