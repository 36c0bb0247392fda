# A database named test must exist; set MYSQLEZ_HOST/USER/PASS (and PORT)

import os
import time

import mysqlez

smallIterations = 100
largeIterations = smallIterations * 100


def gettime():
    return time.time()


def batch_insert(count):
    client.run_batch("INSERT INTO perf_test (a, b) VALUES (?, ?)", 'is',
                     [[i, 'A'] for i in range(count)]).unwrap()


def bulk_insert(count):
    client.bulk_insert('perf_test', 'a,b', [[i, 'A'] for i in range(count)]).unwrap()


def select():
    client.execute("select * from perf_test").unwrap()


dropTable = "drop table if exists perf_test"
createTable = "create table perf_test (a int, b char(1))"

config = {'host': os.environ.get('MYSQLEZ_HOST', 'localhost'),
          'user': os.environ.get('MYSQLEZ_USER', 'root'),
          'pass': os.environ.get('MYSQLEZ_PASS', ''),
          'name': 'test'}
if os.environ.get('MYSQLEZ_PORT'):
    config['port'] = int(os.environ['MYSQLEZ_PORT'])

client = mysqlez.connect(config)
if client.error is not None:
    raise client.error.exception()

for label, insert in (("BATCH", batch_insert), ("BULK", bulk_insert)):
    client.execute(dropTable)
    client.execute(createTable)
    start = gettime()
    insert(smallIterations)
    smallInsertElapsed = gettime() - start
    print("Elapse time of SMALL_%s_INSERT_ITERATIONS = %.4fs" % (label, smallInsertElapsed))

    start = gettime()
    select()
    smallSelectElapsed = gettime() - start
    print("Elapse time of SMALL_SELECT_ITERATIONS = %.4fs" % (smallSelectElapsed))

    client.execute(dropTable)
    client.execute(createTable)
    start = gettime()
    insert(largeIterations)
    largeInsertElapsed = gettime() - start
    print("Elapse time of LARGE_%s_INSERT_ITERATIONS = %.4fs" % (label, largeInsertElapsed))

    start = gettime()
    select()
    largeSelectElapsed = gettime() - start
    print("Elapse time of LARGE_SELECT_ITERATIONS = %.4fs" % (largeSelectElapsed))

    if largeInsertElapsed > smallInsertElapsed * 100:
        print("%s insert is too slow!" % label)

    if largeSelectElapsed > smallSelectElapsed * 100:
        print("Select is too slow!")

    print("\n")

client.execute(dropTable)
client.close()
