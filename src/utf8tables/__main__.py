from utf8tables.compiler import main

if __name__ == '__main__':
    main()
