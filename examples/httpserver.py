import sys
import socket

from cosched.common import *

RESPONSE = (
    "HTTP/1.1 200 OK\r\n"
    "Content-Type: text/plain\r\n"
    "Content-Length: %s\r\n"
    "Connection: close\r\n"
    "\r\n"
    "%s"
)

def server(port):
    print("Starting server at port %s..." % port)
    srv = socket.socket()
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind(('localhost', port))
    srv.listen(64)
    srv.setblocking(False)
    while True:
        yield wait_for_read(srv)
        conn, addr = srv.accept()
        conn.setblocking(False)
        yield spawn_task(handle_client(conn))

def handle_client(sock):
    yield wait_for_read(sock)
    data = sock.recv(8192).decode('latin-1')
    msg = "Received following request:\n\n%s" % data
    yield wait_for_write(sock)
    sock.sendall((RESPONSE % (len(msg), msg)).encode('latin-1'))
    sock.close()

m = Scheduler()
m.spawn(server(len(sys.argv)>1 and int(sys.argv[1]) or 8020))
m.run()
