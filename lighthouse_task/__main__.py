from lighthouse_task.main import main

main()
