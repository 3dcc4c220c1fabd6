import sys
import socket

from cosched.common import *

def server(port):
    srv = socket.socket()
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    adr = ('0.0.0.0', port)
    srv.bind(adr)
    srv.listen(64)
    srv.setblocking(False)
    print("Listening on", adr)
    while 1:
        yield wait_for_read(srv)
        conn, addr = srv.accept()
        print("Connection from %s:%s" % addr)
        yield spawn_task(handler(conn))

def handler(sock):
    sock.setblocking(False)
    yield wait_for_write(sock)
    sock.send(b"WELCOME TO ECHO SERVER !\r\n")
    try:
        while 1:
            yield wait_for_read(sock)
            line = sock.recv(1024)
            if not line or line.strip() == b'exit':
                yield wait_for_write(sock)
                sock.send(b"GOOD BYE")
                return
            yield wait_for_write(sock)
            sock.send(line)
    finally:
        sock.close()

m = Scheduler()
m.spawn(server(len(sys.argv)>1 and int(sys.argv[1]) or 1200))
m.run()
